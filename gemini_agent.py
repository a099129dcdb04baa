# gemini_agent.py

import json
import logging
import re
import requests
from typing import Optional, Dict, Any
from errors import GeminiError

logger = logging.getLogger(__name__)

CODE_FENCE_RE = re.compile(r"```(?:json)?\s*|\s*```", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove optional ```json ... ``` markup around a model reply."""
    if "```" not in text:
        return text.strip()
    return CODE_FENCE_RE.sub("", text).strip()


class GeminiAgent:
    """
    Thin client for the Gemini generateContent REST endpoint. Every call is a
    single prompt in, plain text out; callers own prompt wording and parsing.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: Optional[float] = 30.0,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("GEMINI_API_KEY is required. Set it with: export GEMINI_API_KEY=your_key_here")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def generate(self, prompt: str, generation_config: Optional[Dict[str, Any]] = None) -> str:
        """Send one prompt and return the stripped reply text."""
        payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if generation_config:
            payload["generationConfig"] = generation_config

        try:
            response = self.session.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise GeminiError(f"Gemini request failed: {e}") from e

        if response.status_code != 200:
            raise GeminiError(f"Gemini API error: {response.status_code} - {response.text}")

        try:
            result = response.json()
        except ValueError as e:
            raise GeminiError(f"Gemini returned a non-JSON body: {e}") from e
        return self._extract_text(result)

    def generate_json(self, prompt: str, generation_config: Optional[Dict[str, Any]] = None) -> Any:
        """Send one prompt and parse the reply as JSON, tolerating code fences."""
        text = self.generate(prompt, generation_config)
        try:
            return json.loads(strip_code_fences(text))
        except json.JSONDecodeError as e:
            logger.error(f"Raw model response: {text}")
            raise GeminiError(f"Invalid JSON from Gemini model: {e}") from e

    @staticmethod
    def _extract_text(result: Any) -> str:
        if not isinstance(result, dict):
            raise GeminiError(f"Unexpected Gemini response: {result!r}")
        candidates = result.get("candidates") or []
        if not candidates:
            reason = (result.get("promptFeedback") or {}).get("blockReason")
            raise GeminiError(f"Gemini returned no candidates (blockReason={reason})")

        candidate = candidates[0]
        if not isinstance(candidate, dict):
            raise GeminiError(f"Unexpected Gemini candidate: {candidate!r}")
        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict)).strip()
        if not text:
            raise GeminiError("Gemini returned an empty response")
        return text
