"""
LLM-generated titles and summaries for conversation sessions.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from casual_llm import LLMProvider, SystemMessage, UserMessage

from recruit_memory.conversation_memory import ConversationMemoryService
from recruit_memory.intelligence.prompts import SESSION_SUMMARY_PROMPT
from recruit_memory.models import ConversationMessage

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 120


@dataclass
class SessionSummary:
    title: str
    summary: str


class SessionSummarizer:
    """
    Asks an LLM to title and summarize a session's recent messages.

    LLM and parsing failures are logged and reported as None so a missing
    summary never breaks the conversation.
    """

    def __init__(
        self,
        llm_provider: LLMProvider,
        memory_service: ConversationMemoryService,
        prompt: str = SESSION_SUMMARY_PROMPT,
        message_limit: int = 20,
    ):
        """
        Args:
            llm_provider: LLM provider instance (OpenAI, Ollama, etc.)
            memory_service: Source of messages and target of the summary
            prompt: System prompt, formatted with today's date
            message_limit: How many recent messages to summarize
        """
        self.llm_provider = llm_provider
        self.memory_service = memory_service
        self.prompt = prompt
        self.message_limit = message_limit
        self.llm_call_count = 0
        self.llm_failure_count = 0

    def _transcript(self, messages: List[ConversationMessage]) -> str:
        return "\n".join(f"{m.role}: {m.content}" for m in messages)

    async def summarize(self, session_id: str) -> Optional[SessionSummary]:
        """
        Summarize the session and store the result.

        Returns:
            The stored summary, or None when there was nothing to summarize
            or the LLM response was unusable
        """
        messages = await self.memory_service.get_recent_messages(session_id, self.message_limit)
        if not messages:
            logger.debug(f"Session {session_id} has no messages to summarize")
            return None

        system_prompt = self.prompt.format(today_natural=datetime.now().strftime("%A, %B %d, %Y"))
        llm_messages = [
            SystemMessage(content=system_prompt),
            UserMessage(content=self._transcript(messages)),
        ]

        self.llm_call_count += 1
        try:
            response = await self.llm_provider.chat(
                messages=llm_messages, response_format="json", temperature=0.2
            )
            data = json.loads(response.content)
        except json.JSONDecodeError as e:
            self.llm_failure_count += 1
            logger.error(f"Failed to parse session summary JSON: {e}")
            return None
        except Exception as e:
            self.llm_failure_count += 1
            logger.error(f"Session summary LLM failed: {e}")
            return None

        if not isinstance(data, dict):
            logger.error(f"Session summary response was not an object: {data!r}")
            return None

        title = str(data.get("title") or "").strip()[:MAX_TITLE_LENGTH]
        summary = str(data.get("summary") or "").strip()
        if not title or not summary:
            logger.warning(f"Session summary missing title or summary for {session_id}")
            return None

        await self.memory_service.update_session_summary(session_id, title, summary)
        logger.info(f"Summarized session {session_id}: {title}")
        return SessionSummary(title=title, summary=summary)
