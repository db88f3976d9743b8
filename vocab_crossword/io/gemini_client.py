"""Gemini REST client returning structured vocabulary entries."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional

import requests

from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

API_BASE = "https://generativelanguage.googleapis.com/v1beta"

VOCABULARY_SCHEMA: Dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "word": {"type": "STRING"},
            "clue": {"type": "STRING"},
        },
        "required": ["word", "clue"],
    },
}


class GeminiAPIError(RuntimeError):
    """Raised when Gemini fails or answers with something other than vocabulary JSON."""


class GeminiClient:
    """Asks Gemini for ``[{word, clue}]`` arrays using JSON-mode responses.

    The API key and model name are read from the environment so the CLI never
    takes secrets as arguments.
    """

    def __init__(
        self,
        model_name: str = "gemini-2.5-flash",
        api_key_env: str = "GEMINI_API_KEY",
        model_env: str = "GEMINI_MODEL",
        timeout_seconds: float = 60.0,
        temperature: float = 0.7,
        session: Optional[requests.Session] = None,
    ) -> None:
        api_key = os.environ.get(api_key_env)
        if not api_key:
            raise RuntimeError(f"Set {api_key_env} to use the Gemini word source")
        self._api_key = api_key
        self.model_name = os.environ.get(model_env) or model_name
        self.timeout_seconds = timeout_seconds
        self.temperature = temperature
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{API_BASE}/models/{self.model_name}:generateContent"

    def request_vocabulary(self, prompt: str) -> List[Dict[str, Any]]:
        """Return the entries Gemini produced for ``prompt``.

        Entries are returned as decoded, untrusted dicts; callers validate the
        ``word`` and ``clue`` fields themselves.
        """

        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "responseMimeType": "application/json",
                "responseSchema": VOCABULARY_SCHEMA,
            },
        }
        try:
            response = self._session.post(
                self.endpoint,
                params={"key": self._api_key},
                json=body,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise GeminiAPIError(f"Gemini request to {self.model_name} failed: {exc}") from exc

        raw = self._first_text_part(payload)
        if raw is None:
            LOGGER.warning("Gemini answered without content (finish info: %s)", self._finish_reason(payload))
            raise GeminiAPIError("Gemini answered without any content")

        try:
            entries = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise GeminiAPIError(f"Gemini returned malformed JSON: {exc}") from exc
        if not isinstance(entries, list):
            raise GeminiAPIError("Gemini returned JSON that is not an array of entries")

        vocabulary = [entry for entry in entries if isinstance(entry, dict)]
        LOGGER.info("Gemini returned %s vocabulary entries", len(vocabulary))
        return vocabulary

    @staticmethod
    def _first_text_part(payload: Dict[str, Any]) -> Optional[str]:
        for candidate in payload.get("candidates") or []:
            for part in (candidate.get("content") or {}).get("parts") or []:
                if part.get("text"):
                    return part["text"]
        return None

    @staticmethod
    def _finish_reason(payload: Dict[str, Any]) -> Optional[str]:
        candidates = payload.get("candidates") or []
        if candidates:
            return candidates[0].get("finishReason")
        return (payload.get("promptFeedback") or {}).get("blockReason")
