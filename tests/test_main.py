"""Tests for the command-line entry point."""

import pytest

from agent_orchestrator import main as cli
from agent_orchestrator.collaboration import (
    CollaborationRun,
    TurnFailure,
    TurnRecord,
    TurnSuccess,
)
from agent_orchestrator.config import Settings
from agent_orchestrator.exceptions import ProviderError
from agent_orchestrator.main import load_agent_definitions, main, print_run
from agent_orchestrator.orchestrator import Orchestrator

AGENTS_YAML = (
    "agents:\n"
    "  - name: Planner\n"
    "    provider: openai\n"
    "  - name: Critic\n"
    "    provider: anthropic\n"
    "    instructions: Find weaknesses.\n"
)


@pytest.fixture
def run_cli(monkeypatch, engine):
    """Runs main() with the given arguments against the scripted engine."""
    monkeypatch.setattr(cli, "setup_logging", lambda level=None: None)
    monkeypatch.setattr(cli, "get_settings", lambda: Settings(_env_file=None))
    monkeypatch.setattr(Orchestrator, "from_settings", classmethod(lambda cls, settings: engine))

    def run(*args):
        monkeypatch.setattr("sys.argv", ["agent-orchestrator", *args])
        main()

    return run


@pytest.fixture
def agents_file(tmp_path):
    path = tmp_path / "agents.yaml"
    path.write_text(AGENTS_YAML)
    return str(path)


def test_load_agent_definitions(agents_file):
    definitions = load_agent_definitions(agents_file)

    assert [d["name"] for d in definitions] == ["Planner", "Critic"]
    assert definitions[1]["instructions"] == "Find weaknesses."


@pytest.mark.parametrize("content", ["", "agents: []\n", "name: Planner\n", "- a\n- b\n"])
def test_load_agent_definitions_rejects_missing_agents(tmp_path, content):
    path = tmp_path / "agents.yaml"
    path.write_text(content)

    with pytest.raises(ValueError):
        load_agent_definitions(str(path))


def test_load_agent_definitions_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_agent_definitions(str(tmp_path / "missing.yaml"))


def test_print_run(capsys):
    run = CollaborationRun(
        id="run-1",
        goal="Ship it",
        participant_ids=("a", "b"),
        turns=(
            TurnRecord(1, "a", None, 1.0, TurnSuccess(response="Plan drafted.")),
            TurnRecord(1, "b", None, 2.0, TurnFailure(error="anthropic API error: 529")),
        ),
        started_at=0.0,
        completed_at=2.5,
    )

    print_run(run)

    out = capsys.readouterr().out
    assert "Goal: Ship it" in out
    assert "[round 1] a:\nPlan drafted." in out
    assert "[round 1] b FAILED: anthropic API error: 529" in out
    assert "2 turns, 1 failed, 2.5s" in out


def test_collaborate_from_agents_file(run_cli, agents_file, engine, capsys):
    run_cli("--collaborate", "Ship it", "--agents", agents_file, "--iterations", "2")

    out = capsys.readouterr().out
    assert [a.name for a in engine.list_agents()] == ["Planner", "Critic"]
    assert engine.list_agents()[1].instructions == "Find weaknesses."
    assert "Goal: Ship it" in out
    assert "[round 2] Critic:" in out
    assert "4 turns, 0 failed" in out


def test_partial_failure_exits_normally(run_cli, agents_file, anthropic_adapter, capsys):
    def overloaded(request):
        raise ProviderError("anthropic", status_code=529, status_text="Overloaded")

    anthropic_adapter.script = overloaded

    run_cli("--collaborate", "Ship it", "--agents", agents_file, "--iterations", "1")

    assert "2 turns, 1 failed" in capsys.readouterr().out


def test_exit_code_when_every_turn_fails(
    run_cli, agents_file, openai_adapter, anthropic_adapter, capsys
):
    def unavailable(request):
        raise ProviderError("openai", status_code=503, status_text="Service Unavailable")

    openai_adapter.script = unavailable
    anthropic_adapter.script = unavailable

    with pytest.raises(SystemExit) as exc_info:
        run_cli("--collaborate", "Ship it", "--agents", agents_file, "--iterations", "1")

    assert exc_info.value.code == 1
    assert "2 turns, 2 failed" in capsys.readouterr().out


def test_missing_agents_file_exits(run_cli, tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        run_cli("--collaborate", "Ship it", "--agents", str(tmp_path / "missing.yaml"))

    assert exc_info.value.code == 1
    assert capsys.readouterr().out.startswith("Error:")


def test_no_action_prints_help(run_cli, capsys):
    with pytest.raises(SystemExit) as exc_info:
        run_cli()

    assert exc_info.value.code == 1
    assert "--collaborate" in capsys.readouterr().out


def test_invalid_configuration_exits(run_cli, monkeypatch, agents_file, capsys):
    monkeypatch.setenv("AGENT_MEMORY_CAP", "5")

    with pytest.raises(SystemExit) as exc_info:
        run_cli("--collaborate", "Ship it", "--agents", agents_file)

    assert exc_info.value.code == 1
    assert "invalid configuration" in capsys.readouterr().out
