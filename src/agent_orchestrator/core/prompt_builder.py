"""Prompt construction for agent turns and collaboration rounds."""

from typing import Iterable, Sequence

from ..types import Message

COLLABORATION_OPENING = (
    "Goal: {goal}\n\n"
    "Let's work together to achieve this goal. "
    "Please provide your initial thoughts and approach."
)

COLLABORATION_FOLLOW_UP = (
    "Previous responses:\n{digest}\n\n"
    "Please build upon these ideas and continue working toward our goal."
)


def build_agent_messages(
    instructions: str,
    memory: Iterable[Message],
    user_message: str,
) -> list[Message]:
    """Assemble the call context for one agent turn.

    Args:
        instructions: The agent's system instructions.
        memory: The agent's retained history, oldest first.
        user_message: The new user message.

    Returns:
        ``[system(instructions)] + memory + [user(user_message)]``
    """
    return [Message.system(instructions), *memory, Message.user(user_message)]


def opening_prompt(goal: str) -> str:
    """Prompt given to the first agent of the first round."""
    return COLLABORATION_OPENING.format(goal=goal)


def follow_up_prompt(responses: Sequence[tuple[str, str]]) -> str:
    """Prompt built from the latest round's responses.

    Args:
        responses: ``(agent_name, response)`` pairs in turn order.

    Returns:
        The formatted digest prompt.
    """
    digest = "\n\n".join(f"{name}: {response}" for name, response in responses)
    return COLLABORATION_FOLLOW_UP.format(digest=digest)
