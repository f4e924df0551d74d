import logging
from typing import Dict, List, Optional, Type

from artifact_updater.agents.update.base import BaseUpdater
from artifact_updater.agents.update.diff_updater import DiffUpdater
from artifact_updater.agents.update.progress import ProgressSink
from artifact_updater.agents.update.regex_updater import RegexUpdater
from artifact_updater.agents.update.smart_updater import SmartUpdater
from artifact_updater.agents.update.string_updater import StringUpdater
from artifact_updater.agents.update.template_updater import TemplateUpdater
from artifact_updater.core.config import AUTO, UpdateConfig

logger = logging.getLogger(__name__)

UPDATERS: Dict[str, Type[BaseUpdater]] = {
    "smart": SmartUpdater,
    "regex": RegexUpdater,
    "string": StringUpdater,
    "template": TemplateUpdater,
    "diff": DiffUpdater,
}

# Explicit method requests, checked in this order
METHOD_OVERRIDES = (
    ("regex", ("regex", "pattern")),
    ("string", ("simple", "text only")),
    ("template", ("section", "template")),
    ("diff", ("diff", "merge")),
)


def select_update_method(description: str, content: str, config: UpdateConfig) -> str:
    if config.primary_method != AUTO:
        return config.primary_method

    lower_desc = description.lower()

    for method, keywords in METHOD_OVERRIDES:
        if any(k in lower_desc for k in keywords):
            return method

    # "smart update: ..." and friends
    if any(k in lower_desc for k in config.method_triggers.get("smart", ())):
        return "smart"

    if len(content) > 5000 and ("small" in lower_desc or "minor" in lower_desc):
        return "string"

    if "title" in lower_desc or "heading" in lower_desc or "footer" in lower_desc:
        return "regex"

    return "smart"


def build_method_chain(selected: str, content: str, config: UpdateConfig) -> List[str]:
    """Selected method first, then the configured fallbacks, without repeats."""
    chain = [selected]
    for method in config.fallback_methods:
        if method not in chain:
            chain.append(method)

    if len(content) > config.max_content_size_for_smart_update and "smart" in chain:
        logger.warning(
            f"[DISPATCH] Content size {len(content)} exceeds smart update limit "
            f"{config.max_content_size_for_smart_update}, skipping smart method"
        )
        chain.remove("smart")

    return chain


def get_updater(
        method: str,
        generator=None,
        sink: Optional[ProgressSink] = None,
        config: Optional[UpdateConfig] = None,
) -> BaseUpdater:
    updater_cls = UPDATERS.get(method)
    if updater_cls is None:
        raise ValueError(f"Unknown update method: {method}")
    return updater_cls(generator=generator, sink=sink, config=config)
