import logging

from artifact_updater.agents.update.base import BaseUpdater
from artifact_updater.core.models import Document
from artifact_updater.utils.html_sections import REGEX_PATTERNS, extract_new_content, replace_first

logger = logging.getLogger(__name__)


class RegexUpdater(BaseUpdater):
    """
    Pattern-based edits of the title, the first <h1> and the footer.

    A target is only touched when the description quotes its new value,
    e.g. `change the title to "New Title"`. Nothing here calls the model.
    """

    method = "regex"

    async def update(self, document: Document, description: str) -> str:
        content = document.content or ""
        lower_desc = description.lower()
        logger.info("[REGEX] Using regex-based update method")

        if "title" in lower_desc:
            new_title = extract_new_content(description, "title")
            if new_title:
                content = replace_first(content, REGEX_PATTERNS["title"], f"<title>{new_title}</title>")
                self.notify("title-update")

        if "heading" in lower_desc or "h1" in lower_desc:
            new_heading = extract_new_content(description, "heading")
            if new_heading:
                content = replace_first(content, REGEX_PATTERNS["h1"], f"<h1>{new_heading}</h1>")
                self.notify("heading-update")

        if "footer" in lower_desc:
            if "remove" in lower_desc:
                updated = replace_first(content, REGEX_PATTERNS["footer"], "")
                self.notify("footer-remove", success=updated != content)
                content = updated
            else:
                new_footer = extract_new_content(description, "footer")
                if new_footer:
                    updated = replace_first(content, REGEX_PATTERNS["footer"], f"<footer>{new_footer}</footer>")
                    self.notify("footer-update", success=updated != content)
                    content = updated

        return self.complete(content)
