import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Type

from pydantic import BaseModel

from artifact_updater.agents.update.progress import NullProgressSink, ProgressSink
from artifact_updater.core.config import UpdateConfig, default_update_config
from artifact_updater.core.exceptions import GenerationTimeoutError
from artifact_updater.core.models import ContentDeltaEvent, Document, OperationAppliedEvent

logger = logging.getLogger(__name__)


class BaseUpdater(ABC):
    """
    One strategy for applying an edit request to an HTML document.

    Subclasses implement `update(document, description) -> content`. Calls to
    the generation service go through `generate_object` / `generate_text`,
    which enforce the configured AI timeout.
    """

    method: str = ""

    def __init__(
            self,
            generator=None,
            sink: Optional[ProgressSink] = None,
            config: Optional[UpdateConfig] = None,
    ):
        self.generator = generator
        self.sink = sink or NullProgressSink()
        self.config = config or default_update_config
        self.applied = 0

    @abstractmethod
    async def update(self, document: Document, description: str) -> str:
        pass

    # === Progress ===

    def notify(self, detail: str, success: bool = True):
        # Counted even when client notifications are off
        if success:
            self.applied += 1
        if not self.config.enable_client_notifications:
            return
        self.sink.emit(OperationAppliedEvent(method=self.method, detail=detail, success=success))

    def complete(self, content: str) -> str:
        self.sink.emit(ContentDeltaEvent(content=content))
        return content

    # === Generation ===

    def _require_generator(self):
        if self.generator is None:
            raise RuntimeError(f"[{self.method.upper()}] No generation service configured")
        return self.generator

    async def _with_timeout(self, awaitable):
        try:
            return await asyncio.wait_for(awaitable, timeout=self.config.ai_timeout_seconds)
        except asyncio.TimeoutError as e:
            raise GenerationTimeoutError(
                f"Generation exceeded {self.config.ai_timeout} ms in {self.method} update"
            ) from e

    async def generate_object(self, system: str, prompt: str, schema: Type[BaseModel]) -> Any:
        generator = self._require_generator()

        async def _last_object():
            result = None
            async for delta in generator.generate(system=system, prompt=prompt, schema=schema):
                if delta.get("type") == "object" and delta.get("object") is not None:
                    result = delta["object"]
            return result

        result = await self._with_timeout(_last_object())
        if result is None:
            raise ValueError(f"[{self.method.upper()}] Generation returned no object")
        if isinstance(result, dict):
            result = schema.model_validate(result)
        return result

    async def generate_text(self, system: str, prompt: str, on_delta=None) -> str:
        generator = self._require_generator()

        async def _collect():
            text = ""
            async for delta in generator.generate(system=system, prompt=prompt):
                if delta.get("type") == "text-delta":
                    text += delta.get("text", "")
                    if on_delta:
                        on_delta(text)
            return text

        return await self._with_timeout(_collect())
