import asyncio
import logging
from typing import AsyncIterator, Optional, Union

from langgraph.graph import END, START, StateGraph
from pydantic import BaseModel

from artifact_updater.agents.update.nodes import (
    analyze_node,
    fallback_node,
    finish_node,
    route_after_selection,
    route_after_strategy,
    run_strategy_node,
    select_method_node,
)
from artifact_updater.agents.update.progress import QueueProgressSink
from artifact_updater.core.config import UpdateConfig, resolve_update_config
from artifact_updater.core.exceptions import DocumentUpdateError
from artifact_updater.core.llm_service import get_generation_service
from artifact_updater.core.models import ContentDeltaEvent, Document, FinalContentEvent, FinishEvent
from artifact_updater.core.state import UpdateState
from artifact_updater.utils.prompts import HTML_PROMPT

logger = logging.getLogger(__name__)


def build_graph_update():
    builder = StateGraph(UpdateState)

    builder.add_node("analyze", analyze_node)
    builder.add_node("select_method", select_method_node)
    builder.add_node("run_strategy", run_strategy_node)
    builder.add_node("fallback", fallback_node)
    builder.add_node("finish", finish_node)

    builder.add_edge(START, "analyze")
    builder.add_edge("analyze", "select_method")
    builder.add_conditional_edges(
        "select_method",
        route_after_selection,
        {
            "run": "run_strategy",
            "fallback": "fallback",
        }
    )
    builder.add_conditional_edges(
        "run_strategy",
        route_after_strategy,
        {
            "finish": "finish",
            "retry": "run_strategy",
            "fallback": "fallback",
        }
    )
    builder.add_edge("fallback", "finish")
    builder.add_edge("finish", END)

    return builder.compile()


update_graph = build_graph_update()


async def _drain(task: "asyncio.Task", sink: QueueProgressSink) -> AsyncIterator[BaseModel]:
    task.add_done_callback(lambda _: sink.close())
    try:
        while True:
            event = await sink.queue.get()
            if event is None:
                break
            yield event
    finally:
        if not task.done():
            task.cancel()


async def update_document(
        document: Document,
        description: str,
        config: Union[None, str, UpdateConfig] = None,
        generator=None,
) -> AsyncIterator[BaseModel]:
    """
    Apply `description` to an HTML document, yielding progress events.

    Events: method-selected, operation-applied, content-delta, final-content
    and a closing finish. Raises DocumentUpdateError when even the generic
    fallback rewrite fails.
    """
    update_config = resolve_update_config(config)
    generator = generator or get_generation_service()
    sink = QueueProgressSink()

    initial_state: UpdateState = {
        "document": document,
        "description": description,
        "config": update_config,
        "status": "initialized",
    }
    task = asyncio.ensure_future(update_graph.ainvoke(
        initial_state,
        config={"configurable": {"generator": generator, "sink": sink}},
    ))

    async for event in _drain(task, sink):
        yield event

    try:
        task.result()
    except Exception as e:
        logger.error(f"[UPDATE] ❌ Document update failed: {e}")
        raise DocumentUpdateError("Document update failed") from e


async def create_document(title: str, generator=None) -> AsyncIterator[BaseModel]:
    """Stream a new HTML document generated from its title."""
    generator = generator or get_generation_service()

    draft = ""
    async for delta in generator.generate(system=HTML_PROMPT, prompt=title):
        if delta.get("type") == "text-delta":
            draft += delta.get("text", "")
            yield ContentDeltaEvent(content=draft)

    draft = draft.strip()
    logger.info(f"[CREATE] ✅ Document '{title}' created ({len(draft)} characters)")
    yield FinalContentEvent(content=draft)
    yield FinishEvent()


async def _final_content(events: AsyncIterator[BaseModel]) -> Optional[str]:
    content = None
    async for event in events:
        if isinstance(event, FinalContentEvent):
            content = event.content
    return content


def run_update(
        document: Document,
        description: str,
        config: Union[None, str, UpdateConfig] = None,
        generator=None,
) -> str:
    """Synchronous helper returning the updated content."""
    return asyncio.run(_final_content(update_document(document, description, config, generator)))
