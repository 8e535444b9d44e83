"""Clipboard collaborator used by code blocks.

``Clipboard.copy`` hands text to a writer and keeps a transient "copied"
indicator that the display layer can poll.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import time
from typing import Protocol

LOGGER = logging.getLogger(__name__)


class ClipboardError(Exception):
    """Raised by clipboard writers when the text could not be stored."""


class ClipboardWriter(Protocol):
    def write(self, text: str) -> None: ...


class MemoryClipboard:
    """In-process clipboard writer. Keeps the last copied text."""

    def __init__(self) -> None:
        self.text: str | None = None

    def write(self, text: str) -> None:
        self.text = text


class Clipboard:
    """Copy text through a writer with a timed success indicator.

    Attributes:
        writer: Backend that stores the text
        reset_after: Seconds the ``copied`` indicator stays on after a copy
    """

    def __init__(
        self,
        writer: ClipboardWriter,
        reset_after: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.writer = writer
        self.reset_after = reset_after
        self._clock = clock
        self._copied_at: float | None = None

    @property
    def copied(self) -> bool:
        """True while the last successful copy is younger than ``reset_after``."""
        if self._copied_at is None:
            return False
        return self._clock() - self._copied_at < self.reset_after

    def copy(self, text: str) -> bool:
        """Copy text.

        Args:
            text: Text to copy

        Returns:
            True on success, False if the writer failed
        """
        try:
            self.writer.write(text)
        except (ClipboardError, OSError) as e:
            LOGGER.warning('Failed to copy to clipboard: %s', e)
            return False

        # A new copy restarts the indicator window
        self._copied_at = self._clock()
        return True
