"""Observer interface the pipeline reports progress and messages through."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Tuple

from utils.logging import get_logger

from .schema import LoadMessage

LOGGER = get_logger("archive.events")


class LoadObserver(ABC):
    """Receives messages synchronously at defined points of a run."""

    @abstractmethod
    def on_info(self, message: str) -> None: ...

    @abstractmethod
    def on_error(self, message: str) -> None: ...

    @abstractmethod
    def on_progress(self, n: int, total: int) -> None: ...

    @abstractmethod
    def on_complete(self, message: str) -> None: ...

    def emit(self, message: LoadMessage) -> None:
        """Dispatch a collected :class:`LoadMessage` by level."""

        if message.level == "error":
            self.on_error(message.message)
        elif message.level == "complete":
            self.on_complete(message.message)
        else:
            self.on_info(message.message)


class LoggingObserver(LoadObserver):
    """Mirror every message to the ``archive.events`` logger."""

    def on_info(self, message: str) -> None:
        LOGGER.info(message)

    def on_error(self, message: str) -> None:
        LOGGER.error(message)

    def on_progress(self, n: int, total: int) -> None:
        LOGGER.debug("Progress %d/%d", n, total)

    def on_complete(self, message: str) -> None:
        LOGGER.info(message)


class RecordingObserver(LoggingObserver):
    """Keep messages and progress ticks in memory, in emission order."""

    def __init__(self) -> None:
        self.messages: List[LoadMessage] = []
        self.progress: List[Tuple[int, int]] = []

    def on_info(self, message: str) -> None:
        super().on_info(message)
        self.messages.append(LoadMessage(message=message, level="info"))

    def on_error(self, message: str) -> None:
        super().on_error(message)
        self.messages.append(LoadMessage(message=message, level="error"))

    def on_progress(self, n: int, total: int) -> None:
        super().on_progress(n, total)
        self.progress.append((n, total))

    def on_complete(self, message: str) -> None:
        super().on_complete(message)
        self.messages.append(LoadMessage(message=message, level="complete"))

    def texts(self, *levels: str) -> List[str]:
        return [m.message for m in self.messages if not levels or m.level in levels]

    @property
    def errors(self) -> List[LoadMessage]:
        return [m for m in self.messages if m.level == "error"]
