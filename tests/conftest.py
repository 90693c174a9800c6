# tests/conftest.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

import os

import pytest

from core.config import get_settings
from toolchain.gateway import ToolInvocation

# System program address: valid base58, 32 zero bytes.
VALID_PROGRAM_ID = "11111111111111111111111111111111"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    # Keep a developer's .env or ZKLENSE_* variables out of the tests.
    for name in list(os.environ):
        if name.startswith("ZKLENSE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


StageEffect = Callable[[Path, Sequence[str]], None]


@dataclass
class FakeToolRunner:
    """ToolRunner double: tools resolve unless listed as missing.

    ``effects`` maps a subcommand (``execute``, ``compile``...) to a callable
    that writes the files the real tool would produce; ``exit_codes`` makes a
    subcommand fail.
    """

    missing: set[str] = field(default_factory=set)
    effects: dict[str, StageEffect] = field(default_factory=dict)
    exit_codes: dict[str, int] = field(default_factory=dict)
    stdout: dict[str, str] = field(default_factory=dict)
    calls: list[tuple[str, tuple[str, ...], Path]] = field(default_factory=list)

    def resolve(self, tool: str) -> str | None:
        return None if tool in self.missing else f"/usr/bin/{tool}"

    def run(self, tool: str, args: Sequence[str], cwd: Path) -> ToolInvocation:
        self.calls.append((tool, tuple(args), cwd))
        key = args[0] if args else tool
        exit_code = self.exit_codes.get(key, 0)
        if exit_code == 0 and key in self.effects:
            self.effects[key](cwd, args)
        return ToolInvocation(
            tool=tool,
            args=tuple(args),
            cwd=cwd,
            exit_code=exit_code,
            stdout=self.stdout.get(key, ""),
            stderr="error: constraint failed\n" if exit_code else "",
            duration_ms=5,
        )


def _writer(*names: str, subdir: str = "") -> StageEffect:
    def effect(cwd: Path, _args: Sequence[str]) -> None:
        base = cwd / subdir if subdir else cwd
        base.mkdir(parents=True, exist_ok=True)
        for name in names:
            (base / name).write_bytes(b"\x01" * 16)

    return effect


def toolchain_effects(circuit: str = "hello") -> dict[str, StageEffect]:
    """Effects that mimic a successful nargo/sunspot run for ``circuit``."""
    return {
        "execute": _writer(f"{circuit}.json", f"{circuit}.gz", subdir="target"),
        "compile": _writer(f"{circuit}.ccs"),
        "setup": _writer(f"{circuit}.pk", f"{circuit}.vk"),
        "prove": _writer(f"{circuit}.proof", f"{circuit}.pw"),
        "deploy": _writer(f"{circuit}.so"),
    }


@pytest.fixture
def noir_project(tmp_path: Path) -> Path:
    root = tmp_path / "hello_project"
    root.mkdir()
    (root / "Nargo.toml").write_text(
        '[package]\nname = "hello"\ntype = "bin"\n\n[dependencies]\n',
        encoding="utf-8",
    )
    return root


@pytest.fixture
def fake_runner() -> FakeToolRunner:
    return FakeToolRunner(effects=toolchain_effects())


@pytest.fixture
def make_runner() -> Callable[..., FakeToolRunner]:
    def factory(**kwargs) -> FakeToolRunner:
        kwargs.setdefault("effects", toolchain_effects())
        return FakeToolRunner(**kwargs)

    return factory


@pytest.fixture
def program_id() -> str:
    return VALID_PROGRAM_ID


@pytest.fixture
def proof_project(tmp_path: Path) -> Path:
    """A project with proof artifacts already built under target/."""
    root = tmp_path / "built"
    target = root / "target"
    target.mkdir(parents=True)
    (target / "hello.proof").write_bytes(b"\x02" * 256)
    (target / "hello.pw").write_bytes(b"\x03" * 44)
    return root
