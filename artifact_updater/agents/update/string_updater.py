import logging

from artifact_updater.agents.update.base import BaseUpdater
from artifact_updater.core.models import Document, StringOperations
from artifact_updater.utils.prompts import string_update_prompt

logger = logging.getLogger(__name__)


class StringUpdater(BaseUpdater):
    """Literal find/replace pairs proposed by the model, applied verbatim."""

    method = "string"

    async def update(self, document: Document, description: str) -> str:
        content = document.content or ""
        logger.info("[STRING] Using string manipulation update method")

        result: StringOperations = await self.generate_object(
            system=string_update_prompt(content, description),
            prompt=description,
            schema=StringOperations,
        )

        applied = 0
        for op in result.operations:
            # Pairs are matched against the already-updated content
            if op.find and op.find in content:
                content = content.replace(op.find, op.replace, 1)
                applied += 1
                self.notify(f"string-replace: {op.find[:50]}")
            else:
                logger.debug(f"[STRING] Skipped missing find string: {op.find[:50]!r}")

        logger.info(f"[STRING] ✅ {applied}/{len(result.operations)} replacements applied")
        return self.complete(content)
