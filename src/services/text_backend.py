# src/services/text_backend.py

"""Text-generation backends: send a prompt, receive generated text."""

import logging
from abc import ABC, abstractmethod
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.services.errors import ParseError, RemoteError

logger = logging.getLogger("product_advisor.remote")


class BaseTextBackend(ABC):
    """Abstract transport for a remote text-generation service."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Return True when credentials/endpoint are present."""
        ...

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Return the generated text for *prompt*.

        Raises ``RemoteError`` on transport failure and ``ParseError``
        when the envelope does not carry any text.
        """
        ...


class GeminiBackend(BaseTextBackend):
    """Gemini ``generateContent`` over HTTPS using curl_cffi."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: int | None = None,
    ) -> None:
        self.api_key = (
            Settings.GEMINI_API_KEY if api_key is None else api_key
        )
        self.model = model or Settings.GEMINI_MODEL
        self.base_url = (base_url or Settings.GEMINI_BASE_URL).rstrip("/")
        self.timeout = timeout or Settings.REMOTE_TIMEOUT
        self.session = curl_requests.Session()

    @property
    def endpoint(self) -> str:
        """Full ``generateContent`` URL for the configured model."""
        return f"{self.base_url}/{self.model}:generateContent"

    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @staticmethod
    def build_payload(prompt: str) -> dict[str, Any]:
        """Wrap *prompt* in the request body the API expects."""
        return {"contents": [{"parts": [{"text": prompt}]}]}

    @staticmethod
    def extract_text(data: Any) -> str:
        """Pull ``candidates[0].content.parts[0].text`` out of a response."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ParseError(
                f"Response has no generated text: {exc!r}"
            ) from exc
        if not isinstance(text, str):
            raise ParseError("Generated text is not a string")
        return text

    def generate(self, prompt: str) -> str:
        try:
            resp = self.session.post(
                self.endpoint,
                params={"key": self.api_key},
                headers=Settings.REMOTE_HEADERS,
                json=self.build_payload(prompt),
                timeout=self.timeout,
            )
        except Exception as exc:
            logger.warning(
                "Remote request to %s failed: %s",
                self.endpoint,
                exc,
                exc_info=True,
            )
            raise RemoteError(f"Request failed: {exc}") from exc

        if resp.status_code != 200:
            logger.warning(
                "Remote endpoint returned HTTP %d", resp.status_code,
            )
            raise RemoteError(f"HTTP {resp.status_code}")

        try:
            data = resp.json()
        except (ValueError, RecursionError) as exc:
            raise ParseError(
                f"Response body is not JSON: {exc}"
            ) from exc

        text = self.extract_text(data)
        logger.debug("Remote returned %d characters", len(text))
        return text
