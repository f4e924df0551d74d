import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

UPDATE_METHODS = ("smart", "regex", "string", "template", "diff")
AUTO = "auto"


def _default_triggers() -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({
        "regex": ("regex", "pattern", "title", "heading", "footer", "header"),
        "string": ("simple", "text only", "quick", "replace text"),
        "template": ("section", "template", "structure", "layout"),
        "diff": ("diff", "merge", "compare", "intelligent"),
        "smart": ("smart update", "targeted", "precise", "specific change"),
    })


@dataclass(frozen=True)
class UpdateConfig:
    """How an HTML document update is carried out for one request."""

    primary_method: str = AUTO
    fallback_methods: Tuple[str, ...] = ("string", "regex", "smart", "template", "diff")
    enable_debug: bool = True
    enable_client_notifications: bool = True
    ai_timeout: int = 30000  # ms
    max_content_size_for_smart_update: int = 100000
    method_triggers: Mapping[str, Tuple[str, ...]] = field(default_factory=_default_triggers)

    def __post_init__(self):
        if self.primary_method != AUTO and self.primary_method not in UPDATE_METHODS:
            raise ValueError(f"Unknown primary update method: {self.primary_method}")
        unknown = [m for m in self.fallback_methods if m not in UPDATE_METHODS]
        if unknown:
            raise ValueError(f"Unknown fallback update methods: {unknown}")

    @property
    def ai_timeout_seconds(self) -> float:
        return self.ai_timeout / 1000


default_update_config = UpdateConfig()

UPDATE_CONFIGS = {
    # Fast and simple updates
    "performance": replace(
        default_update_config,
        primary_method="string",
        fallback_methods=("regex", "smart"),
        max_content_size_for_smart_update=50000,
    ),
    # Most reliable updates
    "reliability": replace(
        default_update_config,
        primary_method="regex",
        fallback_methods=("string", "template", "diff"),
        enable_debug=True,
    ),
    # Smart updates on large documents
    "advanced": replace(
        default_update_config,
        primary_method="smart",
        fallback_methods=("template", "diff", "regex", "string"),
        max_content_size_for_smart_update=200000,
    ),
    "debug": replace(
        default_update_config,
        primary_method=AUTO,
        enable_debug=True,
        enable_client_notifications=True,
        ai_timeout=60000,
    ),
}


def get_update_config(config_name: Optional[str] = None) -> UpdateConfig:
    if config_name and config_name in UPDATE_CONFIGS:
        return UPDATE_CONFIGS[config_name]
    if config_name and config_name != "default":
        logger.warning(f"[CONFIG] Unknown update config '{config_name}', using default")
    return default_update_config


def resolve_update_config(config: Union[None, str, UpdateConfig]) -> UpdateConfig:
    if isinstance(config, UpdateConfig):
        return config
    return get_update_config(config)


class Settings(BaseSettings):
    # LLM settings
    llm_provider: str = "anthropic"
    llm_model: str = "claude-sonnet-4-20250514"
    llm_temperature: float = 0.2
    anthropic_api_key: str = ""
    openai_api_key: str = ""

    # Update settings
    update_config: str = "default"

    # Service settings
    log_level: str = "INFO"
    port: int = 8085

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="allow")


# Global settings instance
settings = Settings()
