import logging

from artifact_updater.agents.update.base import BaseUpdater
from artifact_updater.core.models import ContentDeltaEvent, Document
from artifact_updater.utils.prompts import update_document_prompt

logger = logging.getLogger(__name__)


class FallbackRegularUpdater(BaseUpdater):
    """Last resort: the model rewrites the whole document from a generic prompt."""

    method = "fallback"

    async def update(self, document: Document, description: str) -> str:
        original = document.content or ""
        logger.info("[FALLBACK] Using fallback regular update")

        html = await self.generate_text(
            system=update_document_prompt(original),
            prompt=description,
            on_delta=lambda text: self.sink.emit(ContentDeltaEvent(content=text)),
        )
        html = html.strip()

        if not html:
            logger.warning("[FALLBACK] Model returned empty content, keeping original document")
            return self.complete(original)
        return self.complete(html)
