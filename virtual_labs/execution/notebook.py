"""
Notebook Log

Append-only record of a participant's observations during a lab.
Entries are stamped on creation and kept in call order.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Tuple

from ..state.models import NotebookEntry, utcnow
from .exceptions import EmptyObservationError

logger = logging.getLogger(__name__)


class NotebookLog:
    def __init__(
        self,
        entries: Iterable[NotebookEntry] = (),
        on_append: Optional[Callable[[NotebookEntry], None]] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._entries: List[NotebookEntry] = list(entries)
        self._on_append = on_append
        self._clock = clock

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, text: str, context_tag: Optional[str] = None) -> NotebookEntry:
        """
        Records an observation and forwards it to the on_append hook.

        Raises:
            EmptyObservationError: if text is empty after trimming.
        """
        cleaned = text.strip() if isinstance(text, str) else ""
        if not cleaned:
            raise EmptyObservationError("Observation text cannot be empty.")

        # Timestamps stay non-decreasing.
        timestamp = self._clock()
        if self._entries and timestamp < self._entries[-1].timestamp:
            timestamp = self._entries[-1].timestamp

        entry = NotebookEntry(
            timestamp=timestamp,
            text=cleaned,
            context_tag=context_tag or None,
        )
        self._entries.append(entry)
        logger.debug(f"Notebook entry {entry.id} appended ({len(self._entries)} total)")

        if self._on_append:
            self._on_append(entry)
        return entry

    def entries(self) -> Tuple[NotebookEntry, ...]:
        return tuple(self._entries)
