import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessageChunk, HumanMessage, SystemMessage

from artifact_updater.core import llm_service
from artifact_updater.core.config import Settings
from artifact_updater.core.llm_service import GenerationService, get_llm
from artifact_updater.core.models import HtmlOutput


class TestGetLlm:

    def test_anthropic_provider(self):
        settings = Settings(llm_provider="anthropic", llm_model="claude-x", anthropic_api_key="key")

        with patch.object(llm_service, "ChatAnthropic") as chat_anthropic:
            get_llm(settings)

        chat_anthropic.assert_called_once_with(model="claude-x", temperature=settings.llm_temperature, api_key="key")

    def test_openai_provider_without_key_uses_client_environment(self):
        settings = Settings(llm_provider="openai", llm_model="gpt-x", openai_api_key="")

        with patch.object(llm_service, "ChatOpenAI") as chat_openai:
            get_llm(settings)

        chat_openai.assert_called_once_with(model="gpt-x", temperature=settings.llm_temperature)

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            get_llm(Settings(llm_provider="mystery"))


class TestGenerationService:

    def setup_method(self):
        self.llm = MagicMock()
        self.service = GenerationService(self.llm)

    def collect(self, **kwargs):
        async def _run():
            return [delta async for delta in self.service.generate(**kwargs)]
        return asyncio.run(_run())

    def test_text_generation_streams_deltas(self):
        async def fake_stream(messages):
            for chunk in ["<html>", "", [{"type": "text", "text": "</html>"}]]:
                yield AIMessageChunk(content=chunk)

        self.llm.astream = fake_stream

        deltas = self.collect(system="sys", prompt="make a page")

        assert deltas == [
            {"type": "text-delta", "text": "<html>"},
            {"type": "text-delta", "text": "</html>"},
        ]

    def test_structured_generation_yields_one_object(self):
        structured = MagicMock()
        structured.ainvoke = AsyncMock(return_value=HtmlOutput(html="<p>x</p>"))
        self.llm.with_structured_output.return_value = structured

        deltas = self.collect(system="sys", prompt="rewrite", schema=HtmlOutput)

        assert deltas == [{"type": "object", "object": HtmlOutput(html="<p>x</p>")}]
        self.llm.with_structured_output.assert_called_once_with(HtmlOutput)
        messages = structured.ainvoke.call_args.args[0]
        assert messages == [SystemMessage(content="sys"), HumanMessage(content="rewrite")]
