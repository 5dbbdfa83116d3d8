"""Main entry point for the orchestrator CLI.

Either starts the API server or runs a single collaboration defined in a
YAML file and prints the transcript.

Example agents file:

    agents:
      - name: Planner
        provider: openai
        instructions: You break goals into concrete steps.
      - name: Critic
        provider: anthropic
        instructions: You find weaknesses in proposed plans.
"""

import argparse
import sys

import yaml
from pydantic import ValidationError

from .collaboration import DEFAULT_ITERATIONS, CollaborationRun, TurnSuccess
from .config import get_settings
from .logging import setup_logging
from .orchestrator import Orchestrator


def load_agent_definitions(path: str) -> list[dict]:
    """Load agent definitions from a YAML file.

    Args:
        path: Path to a YAML file with a top-level ``agents`` list.

    Returns:
        List of agent config mappings.

    Raises:
        ValueError: If the file has no non-empty ``agents`` list.
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    agents = data.get("agents") if isinstance(data, dict) else None
    if not isinstance(agents, list) or not agents:
        raise ValueError(f"{path}: expected a non-empty 'agents' list")
    return agents


def print_run(run: CollaborationRun) -> None:
    """Print a collaboration transcript to stdout."""
    print(f"Goal: {run.goal}")
    print("-" * 50)
    for turn in run.turns:
        header = f"[round {turn.iteration}] {turn.display_name}"
        if isinstance(turn.outcome, TurnSuccess):
            print(f"{header}:\n{turn.outcome.response}\n")
        else:
            print(f"{header} FAILED: {turn.outcome.error}\n")
    print("-" * 50)
    print(
        f"{len(run.turns)} turns, {len(run.failures)} failed, "
        f"{run.completed_at - run.started_at:.1f}s"
    )


def _start_server(host: str, port: int) -> None:
    """Start the API server."""
    import uvicorn

    print(f"Starting API server at http://{host}:{port}")
    print(f"Streaming channel at ws://{host}:{port}/ws")
    uvicorn.run(
        "agent_orchestrator.api.server:create_app",
        factory=True,
        host=host,
        port=port,
    )


def main() -> None:
    """Main entry point for the orchestrator CLI."""
    parser = argparse.ArgumentParser(description="Dual-provider agent orchestrator")
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the API server",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for the API server (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=3001,
        help="Port for the API server (default: 3001)",
    )
    parser.add_argument(
        "--collaborate",
        metavar="GOAL",
        help="Run one collaboration toward GOAL and print the transcript",
    )
    parser.add_argument(
        "--agents",
        default="agents.yaml",
        help="YAML file with agent definitions (default: agents.yaml)",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=DEFAULT_ITERATIONS,
        help=f"Collaboration rounds (default: {DEFAULT_ITERATIONS})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (also settable via AGENT_ORCHESTRATOR_LOG_LEVEL env var)",
    )
    args = parser.parse_args()

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Error: invalid configuration\n{e}")
        sys.exit(1)
    setup_logging(args.log_level or settings.log_level)

    if args.serve:
        _start_server(args.host, args.port)
        return

    if not args.collaborate:
        parser.print_help()
        sys.exit(1)

    try:
        definitions = load_agent_definitions(args.agents)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    orchestrator = Orchestrator.from_settings(settings)
    agent_ids = [orchestrator.create_agent(definition).id for definition in definitions]

    try:
        run = orchestrator.collaborate(agent_ids, args.collaborate, args.iterations)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print_run(run)
    if len(run.failures) == len(run.turns):
        sys.exit(1)


if __name__ == "__main__":
    main()
