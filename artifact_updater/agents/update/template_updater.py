import logging

from artifact_updater.agents.update.base import BaseUpdater
from artifact_updater.core.models import Document, SectionUpdates
from artifact_updater.utils.html_sections import parse_html_sections
from artifact_updater.utils.prompts import template_update_prompt

logger = logging.getLogger(__name__)


class TemplateUpdater(BaseUpdater):
    """Regenerates named sections (header, nav, main, footer, title) only."""

    method = "template"

    async def update(self, document: Document, description: str) -> str:
        content = document.content or ""
        logger.info("[TEMPLATE] Using template-based update method")

        sections = parse_html_sections(content)
        logger.debug(f"[TEMPLATE] Sections found: {list(sections)}")

        result: SectionUpdates = await self.generate_object(
            system=template_update_prompt(sections, description),
            prompt=description,
            schema=SectionUpdates,
        )

        for name, new_html in result.updated_sections.items():
            original = sections.get(name)
            if not original:
                logger.warning(f"[TEMPLATE] Section '{name}' not in document, skipped")
                continue
            content = content.replace(original, new_html, 1)
            self.notify(f"section-update: {name}")

        return self.complete(content)
