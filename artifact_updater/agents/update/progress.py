import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ProgressSink(ABC):
    """Fire-and-forget receiver for progress events."""

    @abstractmethod
    def emit(self, event: BaseModel):
        pass


class ListProgressSink(ProgressSink):
    def __init__(self):
        self.events: List[BaseModel] = []

    def emit(self, event: BaseModel):
        self.events.append(event)

    def of_type(self, event_type: str) -> List[BaseModel]:
        return [e for e in self.events if e.type == event_type]


class QueueProgressSink(ProgressSink):
    """Feeds events to an asyncio queue; `None` marks the end of the stream."""

    def __init__(self):
        self.queue: "asyncio.Queue[Optional[BaseModel]]" = asyncio.Queue()

    def emit(self, event: BaseModel):
        self.queue.put_nowait(event)

    def close(self):
        self.queue.put_nowait(None)


class NullProgressSink(ProgressSink):
    def emit(self, event: BaseModel):
        logger.debug(f"[PROGRESS] {event.type}")
