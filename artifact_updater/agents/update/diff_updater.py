import logging

from artifact_updater.agents.update.base import BaseUpdater
from artifact_updater.core.models import Document, HtmlOutput
from artifact_updater.utils.html_sections import intelligent_merge
from artifact_updater.utils.prompts import update_document_prompt

logger = logging.getLogger(__name__)


class DiffUpdater(BaseUpdater):
    """
    Asks for a full rewrite, then keeps the original document and swaps in
    only the named sections that changed.
    """

    method = "diff"

    async def update(self, document: Document, description: str) -> str:
        original = document.content or ""
        logger.info("[DIFF] Using diff-based update method")

        result: HtmlOutput = await self.generate_object(
            system=update_document_prompt(original),
            prompt=description,
            schema=HtmlOutput,
        )

        merged, changed = intelligent_merge(original, result.html)
        for name in changed:
            self.notify(f"section-merge: {name}")

        return self.complete(merged)
