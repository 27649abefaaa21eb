"""
Shared Claude client plus helpers for pulling JSON out of model output.
"""

import json
import os
import re

import anthropic


_client = None


def _get_client():
    global _client
    if _client is None:
        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            from sitepolish.config import get_settings
            api_key = get_settings().anthropic_api_key
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY must be set in .env")
        _client = anthropic.AsyncAnthropic(api_key=api_key)
    return _client


async def complete_text(system: str, content, max_tokens: int = 4000, model: str | None = None) -> str:
    """
    Stream a single Claude response and return the accumulated text.
    `content` is either a plain string or a list of content blocks (text/image).
    """
    if model is None:
        from sitepolish.config import get_settings
        model = get_settings().default_model

    client = _get_client()
    text = ""
    async with client.messages.stream(
        model=model,
        max_tokens=max_tokens,
        system=[{
            "type": "text",
            "text": system,
            "cache_control": {"type": "ephemeral"},
        }],
        messages=[{"role": "user", "content": content}],
    ) as stream:
        async for chunk in stream.text_stream:
            text += chunk
    return text.strip()


def image_block(data_b64: str, media_type: str = "image/png") -> dict:
    return {
        "type": "image",
        "source": {"type": "base64", "media_type": media_type, "data": data_b64},
    }


def strip_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if present."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        text = text.rsplit("```", 1)[0]
    return text.strip()


def repair_json(text: str) -> str:
    """Drop trailing commas before a closing bracket or brace."""
    return re.sub(r",(\s*[\]}])", r"\1", text)


def extract_json_object(text: str) -> dict:
    """Parse the outermost {...} block of a response. Raises ValueError if there is none."""
    match = re.search(r"\{[\s\S]*\}", strip_fences(text))
    if not match:
        raise ValueError("No JSON object found in response")
    return json.loads(repair_json(match.group(0)))
