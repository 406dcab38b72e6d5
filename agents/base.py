"""
Evidence Analyzer - Base LLM Configuration

Provides the LLM abstraction layer (OpenAI, Anthropic, Gemini) and the
request/parse helpers shared by every model-backed analyzer.
"""

import asyncio
import json
import logging
import os
from typing import Any, Optional, Type, TypeVar

from crewai import LLM
from pydantic import BaseModel, ValidationError

from config.settings import settings, LLMProvider

logger = logging.getLogger("evidence_analyzer.agents")

ModelT = TypeVar("ModelT", bound=BaseModel)


class LLMProviderError(Exception):
    """The provider failed, timed out, or returned content that does not fit the schema."""


def get_llm(
    provider: Optional[LLMProvider] = None,
    model: Optional[str] = None,
    temperature: Optional[float] = None
) -> LLM:
    """
    Get an LLM instance for the specified or configured provider.

    Args:
        provider: Override the configured provider
        model: Override the configured model
        temperature: Override the configured temperature

    Returns:
        Configured LLM instance
    """
    provider = provider or settings.llm_provider
    model = model or settings.default_model
    temperature = temperature if temperature is not None else settings.llm_temperature

    # Set API key in environment (LiteLLM reads from env)
    if provider == LLMProvider.OPENAI:
        if settings.openai_api_key:
            os.environ["OPENAI_API_KEY"] = settings.openai_api_key
    elif provider == LLMProvider.ANTHROPIC:
        if settings.anthropic_api_key:
            os.environ["ANTHROPIC_API_KEY"] = settings.anthropic_api_key
    elif provider == LLMProvider.GEMINI:
        if settings.google_api_key:
            os.environ["GOOGLE_API_KEY"] = settings.google_api_key
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")

    prefix = f"{provider.value}/"
    return LLM(
        model=model if model.startswith(prefix) else f"{prefix}{model}",
        temperature=temperature,
        timeout=settings.llm_timeout_seconds
    )


default_llm = None


def get_default_llm() -> Optional[LLM]:
    """
    Get the default LLM instance (lazy initialization).

    Returns None when no API key is configured for the active provider.
    """
    global default_llm
    if not settings.active_api_key:
        return None
    if default_llm is None:
        default_llm = get_llm()
    return default_llm


def extract_json_payload(content: Optional[str]) -> str:
    """Strip surrounding whitespace and a leading/trailing ``` fence from model output."""
    if not content or not content.strip():
        return content or ""

    trimmed = content.strip()
    if trimmed.startswith("```"):
        first_newline = trimmed.find("\n")
        if first_newline >= 0:
            trimmed = trimmed[first_newline + 1:]
        trimmed = trimmed.strip()
        if trimmed.endswith("```"):
            trimmed = trimmed[:-3]

    return trimmed.strip()


def parse_model_output(content: Optional[str], schema: Type[ModelT]) -> ModelT:
    """
    Parse model output into a schema instance.

    Raises:
        LLMProviderError: If content is empty, not JSON, or does not fit the schema
    """
    if not content or not content.strip():
        raise LLMProviderError("Provider response did not contain any content")

    try:
        data = json.loads(extract_json_payload(content))
    except json.JSONDecodeError as e:
        raise LLMProviderError(f"Invalid JSON output: {e}") from e

    if not isinstance(data, dict):
        raise LLMProviderError("Provider response is not a JSON object")

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise LLMProviderError(f"Provider response did not match {schema.__name__}: {e}") from e


async def request_structured(
    llm: Any,
    system_prompt: str,
    user_prompt: str,
    schema: Type[ModelT],
    timeout: Optional[float] = None
) -> ModelT:
    """
    Send one chat request and parse the reply into ``schema``.

    The blocking provider call runs in a worker thread bounded by ``timeout``.
    Every failure, including the timeout, is raised as LLMProviderError.
    Cancellation propagates unchanged.
    """
    if llm is None:
        raise LLMProviderError("No API key configured for the active LLM provider")

    messages = [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]
    timeout = timeout or settings.llm_timeout_seconds

    try:
        content = await asyncio.wait_for(asyncio.to_thread(llm.call, messages), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise LLMProviderError(f"Provider call timed out after {timeout}s") from e
    except Exception as e:
        raise LLMProviderError(f"Provider call failed: {e}") from e

    return parse_model_output(content if isinstance(content, str) else None, schema)
