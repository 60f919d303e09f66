"""
Grounded answer generation using Google Gemini chat models.

Dependencies: langchain_google_genai
System role: Final stage of retrieval: turns the assembled prompt into an answer
"""

import asyncio
import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import SecretStr

from knowledge_backend.core.document_processing.tasks.embedding_task import is_rate_limited
from knowledge_backend.core.exceptions import (
    ConfigurationError,
    GenerationError,
    UpstreamRateLimitedError,
)

logger = logging.getLogger(__name__)


class GenerationTask:
    """Send prompt messages to the chat model and return the completion text."""

    def __init__(
        self,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.0,
        api_key: SecretStr | None = None,
        timeout: float = 60.0,
        chat_model: BaseChatModel | None = None,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._api_key = api_key
        self._timeout = timeout
        self._chat_model = chat_model

    def _get_chat_model(self) -> BaseChatModel:
        if self._chat_model is None:
            if self._api_key is None or not self._api_key.get_secret_value().strip():
                raise ConfigurationError(
                    "GOOGLE_API_KEY is not configured",
                    details={"service": "generation"},
                )
            logger.info(f"{__name__}:_get_chat_model - Creating ChatGoogleGenerativeAI model={self._model}")
            self._chat_model = ChatGoogleGenerativeAI(
                model=self._model,
                temperature=self._temperature,
                google_api_key=self._api_key,
            )
        return self._chat_model

    @staticmethod
    def _text_of(content) -> str:
        if isinstance(content, str):
            return content
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)

    async def generate(self, messages: list[BaseMessage]) -> str:
        """
        Produce a completion for the prompt messages.

        Args:
            messages: System and human messages

        Returns:
            str: Completion text

        Raises:
            ConfigurationError: When no API key is configured
            UpstreamRateLimitedError: When the service throttles the request
            GenerationError: On timeout, failure or an empty completion
        """
        chat_model = self._get_chat_model()
        try:
            response = await asyncio.wait_for(chat_model.ainvoke(messages), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise GenerationError(f"Generation timed out after {self._timeout}s") from e
        except Exception as e:
            if is_rate_limited(e):
                raise UpstreamRateLimitedError(
                    f"Generation service rate limited: {e}",
                    service="generation",
                ) from e
            raise GenerationError(f"Failed to generate answer: {e}") from e

        text = self._text_of(response.content).strip()
        if not text:
            raise GenerationError("Chat model returned an empty completion")

        logger.info(f"{__name__}:generate - Completion received ({len(text)} chars)")
        return text
