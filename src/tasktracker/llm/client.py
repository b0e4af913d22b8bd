# src/tasktracker/llm/client.py

from __future__ import annotations

import logging
import time
from typing import Any

import httpx
import openai
from openai import OpenAI

logger = logging.getLogger(__name__)


def _is_auth_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return True
    return exc.__class__.__name__ in {"UnauthorizedError"}


def _is_rate_limit_error(exc: Exception) -> bool:
    if isinstance(exc, openai.RateLimitError):
        return True
    return exc.__class__.__name__ in {"TooManyRequestsError"}


def _is_connection_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.APIConnectionError, httpx.TimeoutException)):
        return True
    return exc.__class__.__name__ in {"Timeout", "ConnectTimeout", "ReadTimeout", "WriteTimeout"}


def _is_not_found_error(exc: Exception) -> bool:
    # OpenAI-compatible SDK uses NotFoundError for HTTP 404 (unknown model)
    return isinstance(exc, openai.NotFoundError)


def _make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


def friendly_llm_error_message(err: Exception) -> str:
    msg = str(err).strip() or "LLM error."
    if "LLM API key is not set" in msg:
        return "LLM is not configured (missing API key). Set TASKTRACKER_OPENAI_API_KEY in .env."
    if "LLM base URL is not set" in msg:
        return "LLM is not configured (missing base URL). Set TASKTRACKER_OPENAI_BASE_URL in .env."
    return msg


class OpenAICompletionClient:
    """
    Single-shot chat completion against an OpenAI-compatible endpoint.

    - Construction fails fast (RuntimeError) when no API key is configured, so the
      composition root can decide to run without the model-based parser.
    - Automatic SDK retries are disabled: the caller has its own fallback path.
    - Every failure surfaces as RuntimeError chained to the SDK exception.
    """

    def __init__(self, settings: Any) -> None:
        api_key = getattr(settings, "openai_api_key", None)
        base_url = getattr(settings, "openai_base_url", "") or ""

        if not api_key or not str(api_key).strip():
            raise RuntimeError("LLM API key is not set. Set TASKTRACKER_OPENAI_API_KEY in your .env.")
        if not base_url.strip():
            raise RuntimeError("LLM base URL is not set. Set TASKTRACKER_OPENAI_BASE_URL in your .env.")

        self.model = str(getattr(settings, "llm_model", "gpt-3.5-turbo"))
        connect_s = float(getattr(settings, "llm_connect_timeout_seconds", 5.0))
        read_s = float(getattr(settings, "llm_read_timeout_seconds", 25.0))

        self._client = OpenAI(
            base_url=str(base_url),
            api_key=str(api_key),
            timeout=_make_timeout(connect_s, read_s),
            max_retries=0,
        )

    def complete(self, prompt: str, *, max_tokens: int, temperature: float) -> str:
        logger.debug("LLM: request model=%s max_tokens=%d temperature=%.2f", self.model, max_tokens, temperature)
        t0 = time.monotonic()
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:
            if _is_auth_error(e):
                raise RuntimeError(
                    "LLM authentication failed. Check your API key (TASKTRACKER_OPENAI_API_KEY)."
                ) from e
            if _is_not_found_error(e):
                raise RuntimeError(f"LLM model not available: {self.model}") from e
            if _is_rate_limit_error(e):
                raise RuntimeError("LLM is rate-limited. Try again later.") from e
            if _is_connection_error(e):
                raise RuntimeError("LLM network/timeout error. Try again later.") from e
            raise RuntimeError(f"LLM request failed ({e.__class__.__name__}).") from e

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        logger.info("LLM: response from model=%s (%.2fs, %d chars)", self.model, time.monotonic() - t0, len(content))
        return content.strip()
