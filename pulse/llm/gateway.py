"""
LLM Gateway — Groq chat completions for report narratives.

Only invoked when the narrative flag is on and an API key is configured.
Requests ask for a JSON object response; anything that does not decode to
a JSON object is reported as an unsuccessful completion.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from groq import Groq

from pulse.config import settings

logger = logging.getLogger("pulse.llm")


def _failure(error: str) -> dict[str, Any]:
    return {"content": "", "parsed": None, "tokens_used": 0, "success": False, "error": error}


def _parse_object(content: str) -> dict[str, Any] | None:
    """Decode `content` as a JSON object, tolerating text around the braces."""
    candidates = [content]
    start, end = content.find("{"), content.rfind("}")
    if 0 <= start < end:
        candidates.append(content[start : end + 1])

    for candidate in candidates:
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(value, dict):
            return value
    return None


class LLMGateway:
    """Groq client wrapper with a retry budget and token accounting."""

    def __init__(self, api_key: str | None = None) -> None:
        key = api_key or settings.groq_api_key
        self.client = Groq(api_key=key, timeout=settings.llm_timeout) if key else None
        self.model = settings.pulse_model
        self.max_retries = settings.llm_max_retries
        self.temperature = settings.llm_temperature
        self.max_tokens = settings.llm_max_tokens
        self.total_tokens_used = 0

    @property
    def available(self) -> bool:
        return self.client is not None

    async def complete(self, prompt: str) -> dict[str, Any]:
        """
        Request a narrative for `prompt`.

        The synchronous Groq SDK runs in a worker thread. Transport errors
        are retried with a doubling delay; a reply that arrives but is not a
        JSON object is returned as-is with success=False and not retried.

        Returns:
            dict with 'content', 'parsed' (dict or None), 'tokens_used'
            and 'success'; failures also carry 'error'.
        """
        if self.client is None:
            return _failure("LLM gateway not configured")

        delay = 1.0
        for attempt in range(1, self.max_retries + 1):
            try:
                response = await asyncio.to_thread(self._create, prompt)
            except Exception as e:
                logger.warning(f"Narrative request {attempt}/{self.max_retries} failed: {e}")
                if attempt == self.max_retries:
                    logger.error("Narrative request retries exhausted")
                    return _failure(str(e))
                await asyncio.sleep(delay)
                delay *= 2
                continue

            content = response.choices[0].message.content or ""
            tokens = response.usage.total_tokens if response.usage else 0
            self.total_tokens_used += tokens
            parsed = _parse_object(content)
            if parsed is None:
                logger.warning(f"Narrative reply was not a JSON object ({len(content)} chars)")
            return {
                "content": content,
                "parsed": parsed,
                "tokens_used": tokens,
                "success": parsed is not None,
            }

        return _failure("LLM retry budget is zero")

    def _create(self, prompt: str):
        return self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            response_format={"type": "json_object"},
        )
