"""Utility functions for LLM-related operations using LiteLLM."""

import asyncio
import json
from enum import Enum
from typing import Any

import litellm
from pydantic import BaseModel, ConfigDict, Field

from simple_explain.config import settings
from simple_explain.utils.logger import get_logger

logger = get_logger(__name__)

# Configure LiteLLM
litellm.telemetry = False
litellm.drop_params = True


class AIModel(str, Enum):
    """
    Models known to work with the lesson prompts, in liteLLM's provider prefix format.
    https://docs.litellm.ai/docs/providers
    """

    GPT_4O_MINI = "openai/gpt-4o-mini"
    GPT_4O = "openai/gpt-4o"
    GEMINI_FLASH_2_0 = "gemini/gemini-2.0-flash"
    CLAUDE_HAIKU_3_5 = "anthropic/claude-3-5-haiku-20241022"


class ResponseFormat(str, Enum):
    """How the model is asked to answer."""

    TEXT = "text"
    JSON_OBJECT = "json_object"


class LLMMessage(BaseModel):
    """A single message in a chat conversation."""

    role: str  # "user", "assistant", or "system"
    content: str


class LLMResponse(BaseModel):
    """
    Unified response format. ``content`` is a string in text mode and the decoded
    JSON value in JSON mode (or the raw string when it did not decode).
    """

    content: Any
    usage: dict[str, Any] = Field(default_factory=dict)
    raw_response: Any = Field(None, exclude=True)

    model_config = ConfigDict(arbitrary_types_allowed=True)


def _decode_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning("LLM returned invalid JSON", error=str(e), length=len(text))
        return text


async def get_completion(
    ai_model: AIModel | str,
    messages: list[LLMMessage],
    system_prompt: str | None = None,
    temperature: float = 0.7,
    max_tokens: int = 1500,
    response_format: ResponseFormat = ResponseFormat.TEXT,
    timeout: float | None = None,
    max_attempts: int | None = None,
    api_key: str | None = None,
) -> LLMResponse:
    """
    Get a completion from an LLM as text or as a JSON object.

    Args:
        ai_model: The AI model to use.
        messages: The conversation messages.
        system_prompt: Optional system prompt.
        temperature: Model temperature (0.0 to 1.0).
        max_tokens: Maximum tokens to generate.
        response_format: Plain text or a JSON object.
        timeout: Seconds before the provider call is abandoned.
        max_attempts: Total attempts before the last error is re-raised.
        api_key: Provider credential, passed through to LiteLLM.

    Returns:
        LLMResponse with content and usage data.
    """
    model_name = ai_model.value if isinstance(ai_model, AIModel) else ai_model
    timeout = timeout if timeout is not None else settings.LLM_TIMEOUT_SECONDS
    attempts = max(1, max_attempts or settings.LLM_MAX_ATTEMPTS)

    # Prepare messages
    api_messages = [msg.model_dump() for msg in messages]
    if system_prompt:
        api_messages.insert(0, {"role": "system", "content": system_prompt})

    params: dict[str, Any] = {
        "model": model_name,
        "messages": api_messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
        "timeout": timeout,
    }
    if api_key:
        params["api_key"] = api_key
    if response_format == ResponseFormat.JSON_OBJECT:
        params["response_format"] = {"type": "json_object"}

    for attempt in range(attempts):
        try:
            logger.info(
                "LLM request",
                model=model_name,
                messages=len(api_messages),
                response_format=response_format.value,
                attempt=attempt + 1,
            )

            response = await litellm.acompletion(**params)
            text = (response.choices[0].message.content or "").strip()

            content: Any = (
                _decode_json(text)
                if response_format == ResponseFormat.JSON_OBJECT
                else text
            )

            usage = {
                "prompt_tokens": getattr(response.usage, "prompt_tokens", 0),
                "completion_tokens": getattr(response.usage, "completion_tokens", 0),
                "total_tokens": getattr(response.usage, "total_tokens", 0),
            }

            return LLMResponse(content=content, usage=usage, raw_response=response)

        except Exception as e:
            if attempt == attempts - 1:
                logger.error(
                    "LLM call failed", model=model_name, attempts=attempts, error=str(e)
                )
                raise

            # Exponential backoff
            backoff = 2**attempt
            logger.warning(f"LLM error, retrying in {backoff}s: {e}")
            await asyncio.sleep(backoff)

    raise RuntimeError("LLM call failed after retries")
