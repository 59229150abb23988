"""
Conversation aggregation.
Derives the per-counterpart inbox view from a flat list of direct messages.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, List


@dataclass
class LastMessagePreview:
    text: str  # still encrypted
    timestamp: datetime
    from_me: bool
    encrypted: bool = True


@dataclass
class ConversationSummary:
    user: Any
    last_message: LastMessagePreview
    unread_count: int


def aggregate_conversations(
    user,
    messages: Iterable,
    count_unread: Callable[[Any], int]
) -> List[ConversationSummary]:
    """
    Build one summary per counterpart.

    Args:
        user: Requesting user
        messages: Direct messages where user is sender or recipient,
            newest first
        count_unread: Returns the number of messages from a counterpart
            to user that user has not read

    Returns:
        Summaries ordered by recency of the last message
    """
    summaries = {}

    for message in messages:
        from_me = message.sender_id is not None and message.sender_id == user.pk
        counterpart = message.recipient if from_me else message.sender

        # Counterpart account deleted
        if counterpart is None:
            continue

        if counterpart.pk in summaries:
            continue

        summaries[counterpart.pk] = ConversationSummary(
            user=counterpart,
            last_message=LastMessagePreview(
                text=message.text,
                timestamp=message.timestamp,
                from_me=from_me,
            ),
            unread_count=count_unread(counterpart),
        )

    return list(summaries.values())
