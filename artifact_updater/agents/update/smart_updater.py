import logging

from bs4 import BeautifulSoup

from artifact_updater.agents.update.base import BaseUpdater
from artifact_updater.core.models import Document, SmartOperations, UpdateOperation
from artifact_updater.utils.html_sections import (
    closing_tag_for,
    element_span,
    find_element_for_opening_tag,
    outermost_spans,
)
from artifact_updater.utils.prompts import smart_update_prompt

logger = logging.getLogger(__name__)

# Tree lookups only locate elements; edits are spliced into the original text
# so markup outside the element keeps its exact bytes.


def _insert_inside(content: str, target: str, target_index: int, new_content: str) -> str:
    try:
        soup = BeautifulSoup(content, "html.parser")
        element = find_element_for_opening_tag(soup, target)
        span = element_span(content, element) if element is not None else None
        if span is not None and span.inner_end is not None:
            return content[:span.inner_end] + new_content + content[span.inner_end:]
    except Exception as e:
        logger.warning(f"[SMART] DOM insert failed, using textual search: {e}")

    # Textual heuristic: first </tag after the target
    closing = closing_tag_for(target)
    if closing:
        end_index = content.find(closing, target_index)
        if end_index != -1:
            return content[:end_index] + new_content + content[end_index:]
    return content


def _modify(content: str, selector: str, new_content: str) -> str:
    try:
        soup = BeautifulSoup(content, "html.parser")
        elements = soup.select(selector)
    except Exception as e:
        logger.warning(f"[SMART] DOM modification failed, falling back to string replace: {e}")
        return content.replace(selector, new_content, 1)

    spans = []
    for element in elements:
        span = element_span(content, element)
        if span is None or span.inner_end is None:
            logger.debug(f"[SMART] Cannot locate <{element.name}> for {selector!r}, skipped")
            continue
        spans.append(span)

    # Back to front so earlier offsets stay valid
    for span in reversed(outermost_spans(spans)):
        content = content[:span.inner_start] + new_content + content[span.inner_end:]
    return content


def apply_operation(content: str, op: UpdateOperation) -> str:
    """Apply one operation to `content`; a missing target is a no-op."""
    target = op.target

    if op.method == "replace":
        if target in content:
            return content.replace(target, op.content or "", 1)
        return content

    if op.method == "remove":
        return content.replace(target, "", 1)

    if op.method == "insert":
        if op.content is None:
            raise ValueError("insert operation requires content")
        target_index = content.find(target)
        if target_index == -1:
            return content

        position = op.position or "after"
        if position == "before":
            return content[:target_index] + op.content + content[target_index:]
        if position == "after":
            after_index = target_index + len(target)
            return content[:after_index] + op.content + content[after_index:]
        if position == "inside":
            return _insert_inside(content, target, target_index, op.content)
        return content[:target_index] + op.content + content[target_index + len(target):]

    if op.method == "modify":
        if op.content is None:
            raise ValueError("modify operation requires content")
        return _modify(content, target, op.content)

    raise ValueError(f"Unknown operation method: {op.method}")


class SmartUpdater(BaseUpdater):
    """Applies a model-generated batch of replace/insert/remove/modify operations in order."""

    method = "smart"

    async def update(self, document: Document, description: str) -> str:
        content = document.content or ""
        logger.info("[SMART] Using simplified smart update method")

        result: SmartOperations = await self.generate_object(
            system=smart_update_prompt(content, description),
            prompt=description,
            schema=SmartOperations,
        )

        for op in result.operations:
            detail = f"{op.method}: {op.target[:30]}"
            try:
                updated = apply_operation(content, op)
            except Exception as e:
                logger.warning(f"[SMART] Failed to apply operation {op.method} on {op.target[:30]!r}: {e}")
                self.notify(detail, success=False)
                continue
            # A missing target leaves the document as it was
            self.notify(detail, success=updated != content)
            content = updated

        return self.complete(content)
