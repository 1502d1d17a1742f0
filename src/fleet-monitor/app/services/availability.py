"""Availability tracking for cluster endpoints.

Holds one message per unreachable cluster endpoint. Messages stay until
they are dismissed; a later successful poll does not remove them.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from shared.observability import get_logger

logger = get_logger(__name__)


class _SortedMessages:
    """Restartable view; every iteration sorts a fresh snapshot."""

    def __init__(self, messages: set[str]):
        self._messages = messages

    def __iter__(self) -> Iterator[str]:
        yield from sorted(self._messages)

    def __len__(self) -> int:
        return len(self._messages)


class AvailabilityTracker:
    """Set of failure messages for currently unreachable clusters."""

    def __init__(self, messages: Iterable[str] = ()):
        self._messages: set[str] = set(messages)

    def record_failure(self, message: str) -> bool:
        """Record a failure message.

        Returns:
            True if the message was not already present
        """
        if message in self._messages:
            return False

        self._messages.add(message)
        logger.info("Availability failure recorded", message=message)
        return True

    def dismiss(self, message: str) -> bool:
        """Dismiss a failure message. Absent messages are ignored.

        Returns:
            True if the message was present
        """
        if message not in self._messages:
            return False

        self._messages.discard(message)
        logger.info("Availability failure dismissed", message=message)
        return True

    def list(self) -> _SortedMessages:
        """Messages in sorted order, as a lazily sorted, re-iterable view."""
        return _SortedMessages(self._messages)

    def __contains__(self, message: object) -> bool:
        return message in self._messages

    def __len__(self) -> int:
        return len(self._messages)
