"""Formatter gateway — call the LLM, parse and validate the structured post."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

import anthropic

from jobwire.formatting.prompt import SYSTEM_PROMPT, format_user_prompt
from jobwire.formatting.schema import FormattedPost, validate_output
from jobwire.ingestion.normalize import DiscoveredItem, to_raw_record, unique_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatResult:
    """Result of formatting one discovered item."""

    key: str
    post: FormattedPost | None
    error: dict | None = None

    @property
    def ok(self) -> bool:
        return self.post is not None


async def format_item(
    item: DiscoveredItem,
    *,
    api_key: str,
    model: str,
    base_url: str | None = None,
    temperature: float = 0.0,
    max_tokens: int = 2000,
    max_retries: int = 0,
    timeout: int = 60,
) -> FormatResult:
    """Rewrite a DiscoveredItem into a FormattedPost using the LLM.

    1. Skip when no API key is configured.
    2. Format the prompt with the item's raw record.
    3. Call the Anthropic API.
    4. Parse the JSON reply and validate it against the post schema.

    Every failure is logged and returned as a FormatResult with error
    details; nothing is retried.
    """
    key = unique_key(item)

    if not api_key:
        logger.debug("No LLM API key configured; skipping %s", key)
        return FormatResult(
            key=key,
            post=None,
            error={"code": "missing_credentials", "message": "LLM API key not configured"},
        )

    user_prompt = format_user_prompt(to_raw_record(item))

    # Call LLM
    try:
        raw_response = await _call_llm(
            api_key=api_key,
            model=model,
            base_url=base_url,
            system_prompt=SYSTEM_PROMPT,
            user_prompt=user_prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            max_retries=max_retries,
            timeout=timeout,
        )
    except Exception as exc:
        logger.exception("LLM API call failed for %s", key)
        return FormatResult(
            key=key,
            post=None,
            error={"code": "api_error", "message": str(exc)},
        )

    # Parse JSON
    try:
        data = _parse_json(raw_response)
    except ValueError as exc:
        logger.warning("Failed to parse LLM response for %s: %s", key, exc)
        return FormatResult(
            key=key,
            post=None,
            error={"code": "parse_error", "message": str(exc)},
        )

    # Validate
    post, errors = validate_output(data)
    if post is None:
        logger.warning("Validation failed for %s: %s", key, "; ".join(errors))
        return FormatResult(
            key=key,
            post=None,
            error={"code": "validation_error", "message": "; ".join(errors)},
        )

    defaults = {}
    if not post.source:
        defaults["source"] = item.source_name
    if not post.source_link and item.url:
        defaults["source_link"] = item.url
    if defaults:
        post = post.model_copy(update=defaults)

    logger.info("Formatted %s → %s", key, post.unique_id)
    return FormatResult(key=key, post=post)


async def _call_llm(
    *,
    api_key: str,
    model: str,
    base_url: str | None,
    system_prompt: str,
    user_prompt: str,
    temperature: float,
    max_tokens: int,
    max_retries: int,
    timeout: int,
) -> str:
    """Call the Anthropic API and return the text response."""
    async with anthropic.AsyncAnthropic(
        api_key=api_key,
        base_url=base_url,
        max_retries=max_retries,
        timeout=timeout,
    ) as client:
        message = await client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
    return message.content[0].text


def _parse_json(raw: str) -> dict:
    """Extract and parse JSON from the LLM response.

    Handles responses that may include markdown code fences.
    """
    text = raw.strip()
    # Strip markdown code fences if present
    if text.startswith("```"):
        lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
        text = "\n".join(lines).strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Invalid JSON: expected an object, got {type(data).__name__}")
    return data
