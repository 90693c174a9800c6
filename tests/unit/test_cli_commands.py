from __future__ import annotations

import json
from pathlib import Path

import httpx
from typer.testing import CliRunner

from cli.app import app
from cli.commands import simulate as simulate_command
from cli.commands import view as view_command
from services.simulation import run_simulation
from zklense import __version__

runner = CliRunner()


def _rpc_client(err=None) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if body["method"] == "simulateTransaction":
            value = {"err": err, "logs": ["Program log: ok"], "unitsConsumed": 123_456}
            result = {"context": {"slot": 1}, "value": value}
        else:
            result = [{"slot": 5, "prioritizationFee": 100}]
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

    return httpx.Client(transport=httpx.MockTransport(handler))


def _patch_rpc(monkeypatch, err=None) -> None:
    client = _rpc_client(err)

    def fake_run_simulation(*args, **kwargs):
        return run_simulation(*args, client=client, **kwargs)

    monkeypatch.setattr(simulate_command, "run_simulation", fake_run_simulation)


def test_version_flag():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_init_creates_config(tmp_path: Path):
    result = runner.invoke(app, ["init", str(tmp_path)])

    assert result.exit_code == 0
    assert (tmp_path / ".zklense" / "config.toml").is_file()
    again = runner.invoke(app, ["init", str(tmp_path)])
    assert again.exit_code == 0
    assert "Already initialized" in again.output


def test_config_requires_init(tmp_path: Path):
    result = runner.invoke(app, ["config", "get-network", "--path", str(tmp_path)])
    assert result.exit_code == 1


def test_config_network_and_rpc(tmp_path: Path):
    runner.invoke(app, ["init", str(tmp_path)])

    result = runner.invoke(app, ["config", "set-network", "mainnet", "--path", str(tmp_path)])
    assert result.exit_code == 0
    result = runner.invoke(app, ["config", "get-network", "--path", str(tmp_path)])
    assert result.output.strip() == "mainnet-beta"

    result = runner.invoke(app, ["config", "set-rpc", "https://rpc.example.com", "-p", str(tmp_path)])
    assert result.exit_code == 0
    result = runner.invoke(app, ["config", "get-rpc", "-p", str(tmp_path)])
    assert result.output.strip() == "https://rpc.example.com"

    result = runner.invoke(app, ["config", "reset-rpc", "-p", str(tmp_path)])
    assert result.exit_code == 0
    result = runner.invoke(app, ["config", "show", "--json", "-p", str(tmp_path)])
    payload = json.loads(result.output)
    assert payload["network"] == {
        "name": "mainnet-beta",
        "rpc_url": "https://api.mainnet-beta.solana.com",
        "custom_rpc": False,
    }


def test_config_rejects_unknown_network(tmp_path: Path):
    runner.invoke(app, ["init", str(tmp_path)])
    result = runner.invoke(app, ["config", "set-network", "moonnet", "--path", str(tmp_path)])
    assert result.exit_code == 1


def test_list_networks(tmp_path: Path):
    result = runner.invoke(app, ["config", "list-networks", "--path", str(tmp_path)])
    assert result.exit_code == 0
    for name in ("mainnet-beta", "devnet", "testnet", "localnet"):
        assert name in result.output


def test_run_reports_stage_failure(monkeypatch, noir_project: Path, make_runner):
    fake = make_runner(exit_codes={"compile": 1})
    monkeypatch.setattr("services.pipeline_runner.SubprocessToolRunner", lambda: fake)

    result = runner.invoke(app, ["run", str(noir_project)])

    assert result.exit_code == 1
    assert "STAGE FAILED" in result.output
    assert not (noir_project / "target" / "hello.ccs").exists()


def test_run_completes(monkeypatch, noir_project: Path, fake_runner):
    monkeypatch.setattr("services.pipeline_runner.SubprocessToolRunner", lambda: fake_runner)

    result = runner.invoke(app, ["run", str(noir_project)])

    assert result.exit_code == 0
    assert "Pipeline completed" in result.output
    assert "hello.proof" in result.output


def test_run_without_tools(monkeypatch, noir_project: Path, make_runner):
    fake = make_runner(missing={"nargo", "sunspot"})
    monkeypatch.setattr("services.pipeline_runner.SubprocessToolRunner", lambda: fake)

    result = runner.invoke(app, ["run", str(noir_project)])

    assert result.exit_code == 1
    assert "MISSING PREREQUISITES" in result.output
    assert fake.calls == []


def test_simulate_writes_report(monkeypatch, proof_project: Path, program_id: str):
    _patch_rpc(monkeypatch)

    result = runner.invoke(app, ["simulate", "--program-id", program_id, "--path", str(proof_project)])

    assert result.exit_code == 0, result.output
    report = json.loads((proof_project / ".zklense" / "report.json").read_text(encoding="utf-8"))
    assert report["compute_units"]["total_compute_units_consumed"] == 123_456
    assert report["environment"]["network"] == "devnet"
    assert (proof_project / ".zklense" / "config.toml").is_file()


def test_simulate_rejection_exits_with_three(monkeypatch, proof_project: Path, program_id: str):
    _patch_rpc(monkeypatch, err="ProgramFailedToComplete")

    result = runner.invoke(app, ["simulate", "--program-id", program_id, "-p", str(proof_project)])

    assert result.exit_code == 3
    assert (proof_project / ".zklense" / "report.json").is_file()


def test_simulate_rejects_invalid_program_id(proof_project: Path):
    result = runner.invoke(app, ["simulate", "--program-id", "bad id!", "-p", str(proof_project)])

    assert result.exit_code == 1
    assert "INVALID INPUT" in result.output
    assert not (proof_project / ".zklense").exists()


def test_simulate_rejects_cu_limit_above_u32(proof_project: Path, program_id: str):
    result = runner.invoke(
        app,
        ["simulate", "--program-id", program_id, "-p", str(proof_project), "--cu-limit", "5000000000"],
    )

    assert result.exit_code == 2
    assert isinstance(result.exception, SystemExit)
    assert not (proof_project / ".zklense").exists()


def test_simulate_rejects_cu_price_above_u64(proof_project: Path, program_id: str):
    result = runner.invoke(
        app,
        ["simulate", "--program-id", program_id, "-p", str(proof_project), "--cu-price", str(2**64)],
    )

    assert result.exit_code == 2
    assert isinstance(result.exception, SystemExit)


def test_out_of_range_cu_limit_setting_is_reported(monkeypatch, proof_project: Path, program_id: str):
    monkeypatch.setenv("ZKLENSE_COMPUTE_UNIT_LIMIT", "5000000000")

    result = runner.invoke(app, ["simulate", "--program-id", program_id, "-p", str(proof_project)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "INVALID CONFIGURATION" in result.output


def test_view_without_report(tmp_path: Path):
    result = runner.invoke(app, ["view", str(tmp_path), "--no-browser"])
    assert result.exit_code == 1
    assert "REPORT UNAVAILABLE" in result.output


def test_view_serves_saved_report(monkeypatch, proof_project: Path, program_id: str):
    _patch_rpc(monkeypatch)
    runner.invoke(app, ["simulate", "--program-id", program_id, "-p", str(proof_project)])
    served = {}

    def fake_serve(body, **kwargs):
        served["body"] = body
        served.update(kwargs)

    monkeypatch.setattr(view_command, "serve_report", fake_serve)

    result = runner.invoke(app, ["view", str(proof_project), "--no-browser"])

    assert result.exit_code == 0
    assert served["body"] == (proof_project / ".zklense" / "report.json").read_bytes()
    assert served["open_browser"] is False
    assert served["web_app_url"] == "http://localhost:3000"
