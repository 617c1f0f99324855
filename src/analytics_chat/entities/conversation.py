"""Conversation turn entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class ConversationTurn:
    """One message of a conversation, most recent last in a sequence."""

    role: Role
    content: str
    timestamp: datetime | None = None


def recent_turns(
    history: list[ConversationTurn] | None, limit: int
) -> list[ConversationTurn]:
    """Keep only the last ``limit`` turns."""
    if not history or limit <= 0:
        return []
    return list(history[-limit:])


def format_turns(turns: list[ConversationTurn]) -> str:
    """Render turns as plain ``User:``/``Assistant:`` lines."""
    lines = []
    for turn in turns:
        speaker = "User" if turn.role == "user" else "Assistant"
        lines.append(f"{speaker}: {turn.content}")
    return "\n".join(lines)
