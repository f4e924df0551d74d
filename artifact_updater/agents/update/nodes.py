import logging

from langchain_core.runnables import RunnableConfig

from artifact_updater.agents.analysis.diagnostics import diagnose_html_update, log_diagnostics
from artifact_updater.agents.update.dispatcher import build_method_chain, get_updater, select_update_method
from artifact_updater.agents.update.fallback_updater import FallbackRegularUpdater
from artifact_updater.agents.update.progress import NullProgressSink
from artifact_updater.core.exceptions import NoChangesAppliedError
from artifact_updater.core.models import FinalContentEvent, FinishEvent, MethodSelectedEvent
from artifact_updater.core.state import UpdateState

logger = logging.getLogger(__name__)


def _runtime(config: RunnableConfig):
    configurable = (config or {}).get("configurable", {})
    return configurable.get("generator"), configurable.get("sink") or NullProgressSink()


async def analyze_node(state: UpdateState) -> UpdateState:
    content = state["document"].content or ""
    diagnostics = diagnose_html_update(content, state["description"])

    level = logging.INFO if state["config"].enable_debug else logging.DEBUG
    log_diagnostics(diagnostics, state["description"], level=level)

    return {"diagnostics": diagnostics}


async def select_method_node(state: UpdateState) -> UpdateState:
    content = state["document"].content or ""
    update_config = state["config"]

    method = select_update_method(state["description"], content, update_config)
    chain = build_method_chain(method, content, update_config)
    logger.info(f"[DISPATCH] Using update method: {method} (chain: {' -> '.join(chain) or 'fallback'})")

    return {"method_chain": chain, "attempt": 0, "errors": [], "status": "selected"}


async def run_strategy_node(state: UpdateState, config: RunnableConfig) -> UpdateState:
    generator, sink = _runtime(config)
    attempt = state.get("attempt", 0)
    method = state["method_chain"][attempt]

    sink.emit(MethodSelectedEvent(method=method))
    updater = get_updater(method, generator=generator, sink=sink, config=state["config"])

    try:
        content = await updater.update(state["document"], state["description"])
        # Only the first choice may legitimately leave the document as it was
        if attempt > 0 and not updater.applied:
            raise NoChangesAppliedError("no changes applied")
    except Exception as e:
        logger.error(f"[DISPATCH] ❌ Update method '{method}' failed: {e}")
        return {
            "attempt": attempt + 1,
            "errors": state.get("errors", []) + [f"{method}: {e}"],
            "status": "failed",
        }

    return {"content": content, "method_used": method, "status": "updated"}


def route_after_strategy(state: UpdateState) -> str:
    if state.get("status") == "updated":
        return "finish"
    if state.get("attempt", 0) < len(state.get("method_chain", [])):
        return "retry"
    return "fallback"


def route_after_selection(state: UpdateState) -> str:
    return "run" if state.get("method_chain") else "fallback"


async def fallback_node(state: UpdateState, config: RunnableConfig) -> UpdateState:
    generator, sink = _runtime(config)
    logger.warning(f"[DISPATCH] All update methods failed ({len(state.get('errors', []))}), falling back to regular update")

    sink.emit(MethodSelectedEvent(method=FallbackRegularUpdater.method))
    updater = FallbackRegularUpdater(generator=generator, sink=sink, config=state["config"])
    # Errors here propagate: there is nothing left to fall back to
    content = await updater.update(state["document"], state["description"])

    return {"content": content, "method_used": FallbackRegularUpdater.method, "status": "updated"}


async def finish_node(state: UpdateState, config: RunnableConfig) -> UpdateState:
    _, sink = _runtime(config)
    sink.emit(FinalContentEvent(content=state["content"], method=state.get("method_used")))
    sink.emit(FinishEvent())

    logger.info(f"[UPDATE] ✅ Document updated with '{state.get('method_used')}' ({len(state['content'])} characters)")
    return {"status": "completed"}
