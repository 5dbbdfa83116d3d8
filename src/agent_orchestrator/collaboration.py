"""Multi-agent collaboration.

The coordinator drives a fixed set of agents through a fixed number of
rounds toward a shared goal. Turns run strictly one at a time: every prompt
after the first is a digest of the latest full round, so each turn depends
on the ones before it. A failed turn is recorded and the run moves on.
"""

import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Sequence, Union

from .agent import AgentSummary
from .core.prompt_builder import follow_up_prompt, opening_prompt
from .logging import get_logger
from .registry import AgentRegistry
from .types import UsageStats

logger = get_logger(__name__)

DEFAULT_ITERATIONS = 3


@dataclass(frozen=True)
class TurnSuccess:
    """A turn that produced a response."""
    response: str
    usage: UsageStats | None = None


@dataclass(frozen=True)
class TurnFailure:
    """A turn whose execution raised."""
    error: str


TurnOutcome = Union[TurnSuccess, TurnFailure]


@dataclass(frozen=True)
class TurnRecord:
    """One agent's execution within one round.

    Attributes:
        iteration: Round number, starting at 1
        agent_id: Identifier the turn was scheduled for
        agent: Agent summary, or None if the agent could not be resolved
        timestamp: Completion time in epoch seconds
        outcome: TurnSuccess or TurnFailure
    """
    iteration: int
    agent_id: str
    agent: AgentSummary | None
    timestamp: float
    outcome: TurnOutcome

    @property
    def ok(self) -> bool:
        return isinstance(self.outcome, TurnSuccess)

    @property
    def display_name(self) -> str:
        return self.agent.name if self.agent else self.agent_id

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "iteration": self.iteration,
            "timestamp": self.timestamp,
            "agent": self.agent.to_dict() if self.agent else {"id": self.agent_id},
        }
        if isinstance(self.outcome, TurnSuccess):
            result["response"] = self.outcome.response
            result["usage"] = self.outcome.usage.to_dict() if self.outcome.usage else None
        else:
            result["error"] = self.outcome.error
        return result


@dataclass(frozen=True)
class CollaborationRun:
    """A completed collaboration, handed to the caller as an immutable value."""
    id: str
    goal: str
    participant_ids: tuple[str, ...]
    turns: tuple[TurnRecord, ...]
    started_at: float
    completed_at: float

    @property
    def failures(self) -> list[TurnRecord]:
        return [turn for turn in self.turns if not turn.ok]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "goal": self.goal,
            "agents": list(self.participant_ids),
            "conversation": [turn.to_dict() for turn in self.turns],
            "started": self.started_at,
            "completed": self.completed_at,
        }


@dataclass
class _RunState:
    """Mutable state of a run in progress."""
    goal: str
    participant_ids: tuple[str, ...]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started_at: float = field(default_factory=time.time)
    turns: list[TurnRecord] = field(default_factory=list)

    def freeze(self) -> CollaborationRun:
        return CollaborationRun(
            id=self.id,
            goal=self.goal,
            participant_ids=self.participant_ids,
            turns=tuple(self.turns),
            started_at=self.started_at,
            completed_at=time.time(),
        )


class CollaborationCoordinator:
    """Runs agents round-robin toward a shared goal."""

    def __init__(self, registry: AgentRegistry):
        self.registry = registry

    def collaborate(
        self,
        agent_ids: Sequence[str],
        goal: str,
        iterations: int = DEFAULT_ITERATIONS,
    ) -> CollaborationRun:
        """Run a collaboration to completion.

        Every round visits the agents in the given order. The first agent of
        the first round receives the opening prompt; after each turn the next
        prompt is rebuilt from the most recent ``len(agent_ids)`` turns, so the
        first agent of round two sees the whole of round one. Errors from a
        turn are captured into that turn's record and the run continues.

        Args:
            agent_ids: Participants in turn order, non-empty
            goal: Shared goal text
            iterations: Number of rounds, positive

        Returns:
            The completed, immutable CollaborationRun

        Raises:
            ValueError: If agent_ids is empty or iterations is not positive
        """
        if not agent_ids:
            raise ValueError("collaboration needs at least one agent")
        if iterations < 1:
            raise ValueError(f"iterations must be positive, got {iterations}")

        state = _RunState(goal=goal, participant_ids=tuple(agent_ids))
        round_size = len(state.participant_ids)
        prompt = opening_prompt(goal)

        logger.info(
            f"collaboration {state.id} started: {round_size} agents, {iterations} rounds"
        )

        for iteration in range(1, iterations + 1):
            for agent_id in state.participant_ids:
                state.turns.append(self._run_turn(iteration, agent_id, prompt))
                prompt = self._next_prompt(state.turns[-round_size:], prompt)

        run = state.freeze()
        logger.info(
            f"collaboration {run.id} completed: {len(run.turns)} turns, "
            f"{len(run.failures)} failed"
        )
        return run

    def _run_turn(self, iteration: int, agent_id: str, prompt: str) -> TurnRecord:
        try:
            result = self.registry.execute_agent(agent_id, prompt)
        except Exception as e:
            logger.warning(f"turn failed in round {iteration} for agent {agent_id}: {e}")
            return TurnRecord(
                iteration=iteration,
                agent_id=agent_id,
                agent=self._summary_or_none(agent_id),
                timestamp=time.time(),
                outcome=TurnFailure(error=str(e)),
            )

        return TurnRecord(
            iteration=iteration,
            agent_id=agent_id,
            agent=result.agent,
            timestamp=time.time(),
            outcome=TurnSuccess(response=result.response, usage=result.usage),
        )

    def _summary_or_none(self, agent_id: str) -> AgentSummary | None:
        if agent_id in self.registry:
            return self.registry.get_agent(agent_id).summary
        return None

    @staticmethod
    def _next_prompt(window: Sequence[TurnRecord], current: str) -> str:
        # failed turns have nothing to contribute to the digest
        responses = [
            (turn.display_name, turn.outcome.response)
            for turn in window
            if isinstance(turn.outcome, TurnSuccess)
        ]
        if not responses:
            return current
        return follow_up_prompt(responses)
