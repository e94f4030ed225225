"""Google Gemini vision client used to read schedule boards."""
from __future__ import annotations

import logging

import google.generativeai as genai

from schedule_checker.config import SETTINGS, Settings
from schedule_checker.domain.errors import VisionServiceError
from schedule_checker.domain.repositories import VisionExtractionClient

logger = logging.getLogger(__name__)


class GeminiVisionClient(VisionExtractionClient):
    """Single-shot ``generate_content`` call with an inline image part.

    Any SDK or transport exception is re-raised as ``VisionServiceError``.
    A response without text comes back as an empty string.
    """

    def __init__(self, settings: Settings = SETTINGS, api_key: str | None = None) -> None:
        self._settings = settings
        key = api_key or settings.gemini_api_key
        if not key:
            raise VisionServiceError("GEMINI_API_KEY/GOOGLE_API_KEY not provided")
        genai.configure(api_key=key)
        self._model = genai.GenerativeModel(settings.gemini_model)

    def extract(self, image: bytes, mime_type: str, prompt: str) -> str:
        logger.info("Sending %d byte %s image to %s", len(image), mime_type, self._settings.gemini_model)
        try:
            response = self._model.generate_content(
                [prompt, {"mime_type": mime_type, "data": image}],
                generation_config=genai.types.GenerationConfig(
                    temperature=self._settings.temperature,
                    max_output_tokens=self._settings.max_output_tokens,
                    response_mime_type="application/json",
                ),
                request_options={"timeout": self._settings.request_timeout_seconds},
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning("Gemini request failed: %s", exc)
            raise VisionServiceError(f"Gemini request failed: {exc}") from exc

        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            logger.info(
                "Gemini token usage: prompt=%s response=%s total=%s",
                getattr(usage, "prompt_token_count", "n/a"),
                getattr(usage, "candidates_token_count", "n/a"),
                getattr(usage, "total_token_count", "n/a"),
            )

        try:
            return response.text
        except ValueError:
            # raised when the candidate was blocked or carries no parts
            logger.warning("Gemini response carried no text")
            return ""
