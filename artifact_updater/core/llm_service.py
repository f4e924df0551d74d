import logging
from typing import Any, AsyncIterator, Dict, Optional, Type

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel

from artifact_updater.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def get_llm(settings: Optional[Settings] = None) -> BaseChatModel:
    """Initialize and return the chat model configured in the settings"""
    settings = settings or default_settings

    # Without an explicit key the clients read their own environment variable
    if settings.llm_provider == "openai":
        kwargs = {"api_key": settings.openai_api_key} if settings.openai_api_key else {}
        return ChatOpenAI(model=settings.llm_model, temperature=settings.llm_temperature, **kwargs)
    if settings.llm_provider == "anthropic":
        kwargs = {"api_key": settings.anthropic_api_key} if settings.anthropic_api_key else {}
        return ChatAnthropic(model=settings.llm_model, temperature=settings.llm_temperature, **kwargs)
    raise ValueError(f"Unsupported LLM provider: {settings.llm_provider}")


def _chunk_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    # Anthropic streams a list of content blocks
    parts = []
    for block in content or []:
        if isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
        elif isinstance(block, str):
            parts.append(block)
    return "".join(parts)


class GenerationService:
    """
    Text / structured generation over a LangChain chat model.

    `generate` yields {"type": "text-delta", "text": ...} events when no schema
    is given, and a single {"type": "object", "object": ...} event otherwise.
    """

    def __init__(self, llm: BaseChatModel):
        self.llm = llm

    async def generate(
            self,
            system: str,
            prompt: str,
            schema: Optional[Type[BaseModel]] = None,
    ) -> AsyncIterator[Dict[str, Any]]:
        messages = [SystemMessage(content=system), HumanMessage(content=prompt)]

        if schema is None:
            async for chunk in self.llm.astream(messages):
                text = _chunk_text(chunk.content)
                if text:
                    yield {"type": "text-delta", "text": text}
            return

        structured_llm = self.llm.with_structured_output(schema)
        logger.debug(f"[LLM] Structured call with schema {schema.__name__}")
        result = await structured_llm.ainvoke(messages)
        yield {"type": "object", "object": result}


def get_generation_service() -> GenerationService:
    return GenerationService(get_llm())
