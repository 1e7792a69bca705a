"""LangChain ChatAnthropic wrapper implementing the Summarizer collaborator."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from thoughtlands.config import settings
from thoughtlands.llm.model_router import get_model_for_task
from thoughtlands.llm.prompts import SUMMARY_SYSTEM

logger = logging.getLogger(__name__)


class LLMSummarizer:
    """Summaries via Anthropic. Returns None when not configured, never raises on API errors."""

    def __init__(self, task: str = "cluster_summary", api_key: str | None = None) -> None:
        self.task = task
        self.api_key = settings.anthropic_api_key if api_key is None else api_key

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def summarize(self, prompt: str, source_texts: Sequence[str]) -> str | None:
        if not self.configured:
            logger.info("Summarizer not configured (set ANTHROPIC_API_KEY in .env)")
            return None
        if not source_texts:
            return None

        from langchain_anthropic import ChatAnthropic
        from langchain_core.messages import HumanMessage, SystemMessage

        llm = ChatAnthropic(
            model=get_model_for_task(self.task),
            api_key=self.api_key,
            max_tokens=settings.summary_max_tokens,
            temperature=settings.summary_temperature,
        )
        messages = [SystemMessage(content=SUMMARY_SYSTEM), HumanMessage(content=prompt)]
        try:
            response = await llm.ainvoke(messages)
        except Exception as e:
            logger.warning("Summary request failed (%s): %s", self.task, e)
            return None
        return str(response.content)
