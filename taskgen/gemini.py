"""Client for the Gemini ``generateContent`` endpoint.

Turns a topic into a fixed prompt, sends it as a single-turn request and
splits the returned text into one step per line. No retries: any failure
surfaces to the caller as a ``GenerationError``.
"""
import logging
from typing import Any, List, Optional

import httpx

from .config import Settings
from .errors import ConfigurationError, EmptyResponseError, UpstreamError

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Generate 5 actionable steps to learn about {topic}. "
    "Return only the steps on separate lines, no numbering or formatting."
)


def build_prompt(topic: str) -> str:
    return PROMPT_TEMPLATE.format(topic=topic)


def parse_steps(raw_text: str) -> List[str]:
    """Split model output into steps, dropping blank lines and keeping order."""
    return [line for line in raw_text.split("\n") if line.strip()]


def _extract_text(data: Any) -> Optional[str]:
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None


class GeminiClient:
    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        self.api_key = settings.gemini_api_key
        self.model = settings.gemini_model
        self.base_url = settings.gemini_base_url.rstrip("/")
        self.timeout = settings.gemini_timeout
        self._http_client = http_client

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def _post(self, payload: dict) -> httpx.Response:
        params = {"key": self.api_key}
        if self._http_client is not None:
            return self._http_client.post(self.url, params=params, json=payload)
        with httpx.Client(timeout=httpx.Timeout(self.timeout, connect=10.0)) as client:
            return client.post(self.url, params=params, json=payload)

    def generate_steps(self, topic: str) -> List[str]:
        if not self.api_key:
            logger.error("GEMINI_API_KEY is not configured")
            raise ConfigurationError("API key missing")

        prompt = build_prompt(topic)
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        logger.debug("Sending request to Gemini with prompt: %s", prompt)

        try:
            response = self._post(payload)
        except httpx.HTTPError as e:
            logger.error("Gemini request failed: %s", e)
            raise UpstreamError(f"Gemini request failed: {e}") from e

        if response.status_code >= 400:
            logger.error("Gemini API error: status=%s body=%s", response.status_code, response.text[:500])
            raise UpstreamError(
                f"Gemini API error {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Gemini returned a non-JSON body: %s", response.text[:500])
            raise UpstreamError(
                "Gemini returned a non-JSON body",
                status_code=response.status_code,
                body=response.text,
            ) from e

        raw_text = _extract_text(data)
        if not raw_text:
            logger.error("Gemini API responded but no text was found")
            raise EmptyResponseError("Empty content from Gemini")

        steps = parse_steps(raw_text)
        if not steps:
            logger.error("Gemini API responded with blank lines only")
            raise EmptyResponseError("No steps in Gemini response")

        logger.info("Gemini returned %d steps for topic %r", len(steps), topic)
        return steps
