"""Structured JSON generation through Gemini or a local Ollama model.

Callers pass a task, an input payload and a JSON schema. The reply is parsed
and checked against the schema; one correction round is attempted before
giving up with `AIServiceError`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from legacy_vault.core.config import settings

logger = logging.getLogger(__name__)

PROVIDERS = ("gemini", "ollama")


class AIServiceError(Exception):
    """Raised when the provider is unreachable or keeps returning invalid JSON."""


def generate_structured(
    task: str,
    payload: dict[str, Any],
    schema: dict[str, Any],
    provider: str | None = None,
    system: str | None = None,
) -> dict[str, Any]:
    """Return a dict matching `schema`, generated by `provider` (default: configured provider)."""
    provider_name = (provider or settings.ai_provider).strip().lower()
    if provider_name not in PROVIDERS:
        raise AIServiceError(f"Unsupported AI provider '{provider_name}'")

    prompt = _build_prompt(task, payload, schema, system)
    for attempt in (1, 2):
        raw = _call_provider(provider_name, prompt, schema)
        try:
            parsed = _parse_output(raw)
            _check_schema(parsed, schema)
            return parsed
        except ValueError as exc:
            logger.warning("%s returned invalid output (attempt %s): %s", provider_name, attempt, exc)
            if attempt == 2:
                raise AIServiceError(f"{provider_name} returned invalid JSON twice: {exc}") from exc
            prompt = (
                "Your previous output was invalid. Fix it and return only valid JSON.\n\n"
                f"Error:\n{exc}\n\nPrevious output:\n{raw}\n\n" + prompt
            )


def _call_provider(provider: str, prompt: str, schema: dict[str, Any]) -> str | dict[str, Any]:
    if provider == "gemini":
        return _call_gemini(prompt, schema)
    return _call_ollama(prompt, schema)


def _call_gemini(prompt: str, schema: dict[str, Any]) -> str | dict[str, Any]:
    if not settings.gemini_api_key:
        raise AIServiceError("GEMINI_API_KEY is not configured")

    client = genai.Client(api_key=settings.gemini_api_key)
    try:
        response = client.models.generate_content(
            model=settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
    except genai_errors.APIError as exc:
        raise AIServiceError(f"Gemini request failed: {exc}") from exc
    parsed = getattr(response, "parsed", None)
    if isinstance(parsed, dict):
        return parsed
    if not response.text:
        raise AIServiceError("Gemini returned an empty response")
    return response.text


def _call_ollama(prompt: str, schema: dict[str, Any]) -> str:
    url = settings.ollama_base_url.rstrip("/") + "/api/generate"
    try:
        response = httpx.post(
            url,
            json={"model": settings.ollama_model, "prompt": prompt, "stream": False, "format": schema},
            timeout=settings.ai_timeout_seconds,
        )
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise AIServiceError(f"Ollama request failed: {exc}") from exc

    data = response.json()
    if "response" not in data:
        raise AIServiceError("Ollama response missing 'response' field")
    return data["response"]


def _parse_output(raw: str | dict[str, Any]) -> dict[str, Any]:
    if isinstance(raw, dict):
        return raw
    text = raw.strip()
    # models sometimes wrap JSON in a markdown fence
    if text.startswith("```"):
        lines = text.splitlines()
        if len(lines) >= 2 and lines[-1].strip() == "```":
            text = "\n".join(lines[1:-1]).strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON: {exc.msg}") from exc
    if not isinstance(parsed, dict):
        raise ValueError("JSON must be an object")
    return parsed


def _build_prompt(task: str, payload: dict[str, Any], schema: dict[str, Any], system: str | None) -> str:
    preamble = system or "You are a structured-output engine."
    return (
        f"{preamble} Return only JSON that matches the provided schema exactly.\n\n"
        f"Task:\n{task}\n\n"
        f"Input payload:\n{json.dumps(payload, ensure_ascii=True, default=str)}\n\n"
        f"JSON schema:\n{json.dumps(schema, ensure_ascii=True)}"
    )


_TYPES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "number": (int, float),
    "integer": (int,),
    "boolean": (bool,),
    "object": (dict,),
    "array": (list,),
}


def _check_schema(value: Any, schema: dict[str, Any], path: str = "$") -> None:
    """Minimal JSON-schema check: type, required keys, nested properties and items."""
    expected = schema.get("type")
    if expected in _TYPES:
        ok = isinstance(value, _TYPES[expected])
        if expected in ("number", "integer") and isinstance(value, bool):
            ok = False
        if not ok:
            raise ValueError(f"{path}: expected type '{expected}'")

    if expected == "object":
        for key in schema.get("required", []):
            if key not in value:
                raise ValueError(f"{path}: missing required field '{key}'")
        for key, sub_schema in schema.get("properties", {}).items():
            if key in value:
                _check_schema(value[key], sub_schema, f"{path}.{key}")
    elif expected == "array" and "items" in schema:
        for idx, item in enumerate(value):
            _check_schema(item, schema["items"], f"{path}[{idx}]")
