import sys
from pathlib import Path

from toolchain.gateway import (
    COMMAND_NOT_FOUND_EXIT_CODE,
    SubprocessToolRunner,
    ToolInvocation,
    missing_tools,
)


def test_missing_tool_does_not_resolve() -> None:
    runner = SubprocessToolRunner()
    assert missing_tools(runner, ["zklense-no-such-tool"]) == ["zklense-no-such-tool"]


def test_run_captures_output_and_exit_code(tmp_path: Path) -> None:
    script = "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"

    invocation = SubprocessToolRunner().run(sys.executable, ["-c", script], tmp_path)

    assert invocation.exit_code == 3
    assert not invocation.succeeded
    assert invocation.stdout.strip() == "out"
    assert invocation.stderr.strip() == "err"
    assert invocation.cwd == tmp_path


def test_run_in_working_directory(tmp_path: Path) -> None:
    script = "from pathlib import Path; Path('made.txt').write_text('x')"

    invocation = SubprocessToolRunner().run(sys.executable, ["-c", script], tmp_path)

    assert invocation.succeeded
    assert (tmp_path / "made.txt").is_file()


def test_unstartable_tool_is_a_failed_invocation(tmp_path: Path) -> None:
    invocation = SubprocessToolRunner().run("zklense-no-such-tool", ["--help"], tmp_path)

    assert invocation.exit_code == COMMAND_NOT_FOUND_EXIT_CODE
    assert invocation.stderr


def test_stderr_tail_keeps_last_lines() -> None:
    stderr = "\n".join(f"line {i}" for i in range(30))
    invocation = ToolInvocation("sunspot", ("prove",), Path("."), 1, "", stderr, 10)

    assert invocation.stderr_tail(3) == "line 27\nline 28\nline 29"
    assert invocation.command_line == "sunspot prove"
