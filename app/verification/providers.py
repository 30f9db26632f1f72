"""
LLM provider implementations for report verification.

A provider is the "text classifier" seam of the verification pipeline: it
takes a prompt and returns the model's raw text. Supports multiple LLM
backends via a provider pattern:

- gemini: Google Gemini (default, requires GEMINI_API_KEY)
- groq: Groq-hosted Llama models (requires GROQ_API_KEY)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_groq import ChatGroq

from app.core.config import settings

logger = logging.getLogger(__name__)


def _content_to_text(content: Any) -> str:
    """
    Flatten a chat message content into plain text.

    Gemini may return a list of content parts instead of a single string.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content)


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Send a single prompt to the model.

        Args:
            prompt: Full prompt text

        Returns:
            The model's response text (may be empty)
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass


class LangChainProvider(BaseLLMProvider):
    """Provider backed by a lazily created LangChain chat model."""

    def __init__(self, model: str):
        self.model = model
        self._llm: Optional[BaseChatModel] = None

    @abstractmethod
    def _create_llm(self) -> BaseChatModel:
        pass

    def get_llm(self) -> BaseChatModel:
        """Get or create the LangChain LLM instance."""
        if self._llm is None:
            self._llm = self._create_llm()
            logger.info(f"{type(self).__name__} initialized with model: {self.model}")
        return self._llm

    async def generate(self, prompt: str) -> str:
        llm = self.get_llm()
        response = await llm.ainvoke([HumanMessage(content=prompt)])
        return _content_to_text(response.content)


class GeminiProvider(LangChainProvider):
    """Google Gemini LLM provider."""

    def __init__(self, api_key: str, model: Optional[str] = None):
        super().__init__(model or settings.GEMINI_LLM_MODEL)
        self.api_key = api_key

    def _create_llm(self) -> ChatGoogleGenerativeAI:
        return ChatGoogleGenerativeAI(
            model=self.model,
            google_api_key=self.api_key,
            temperature=settings.VERIFICATION_TEMPERATURE,
        )

    @property
    def name(self) -> str:
        return "gemini"


class GroqProvider(LangChainProvider):
    """Groq LLM provider using Llama models."""

    def __init__(self, api_key: str, model: Optional[str] = None):
        super().__init__(model or settings.GROQ_LLM_MODEL)
        self.api_key = api_key

    def _create_llm(self) -> ChatGroq:
        return ChatGroq(
            api_key=self.api_key,
            model=self.model,
            temperature=settings.VERIFICATION_TEMPERATURE,
        )

    @property
    def name(self) -> str:
        return "groq"


def get_default_provider() -> Optional[BaseLLMProvider]:
    """
    Get the verification provider based on available configuration.

    VERIFICATION_LLM_PROVIDER picks a provider explicitly. Otherwise:
    1. Gemini (if GEMINI_API_KEY is set)
    2. Groq (if GROQ_API_KEY is set)

    Returns:
        The provider, or None when no credential is configured. Callers treat
        None as "skip verification", not as an error.

    Raises:
        ValueError: If VERIFICATION_LLM_PROVIDER names an unknown provider
    """
    choice = (settings.VERIFICATION_LLM_PROVIDER or "").strip().lower()

    if choice and choice not in ("gemini", "groq"):
        raise ValueError(
            f"Unknown VERIFICATION_LLM_PROVIDER '{settings.VERIFICATION_LLM_PROVIDER}'. "
            "Expected 'gemini' or 'groq'."
        )

    if choice in ("", "gemini") and settings.GEMINI_API_KEY:
        logger.info("Using Gemini as verification provider")
        return GeminiProvider(api_key=settings.GEMINI_API_KEY)

    if choice in ("", "groq") and settings.GROQ_API_KEY:
        logger.info("Using Groq as verification provider")
        return GroqProvider(api_key=settings.GROQ_API_KEY)

    logger.warning(
        "No verification provider configured - reports will be stored unverified"
    )
    return None
