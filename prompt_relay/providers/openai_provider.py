"""OpenAI backend: raw JSON POSTs for chat/responses, SDK call for speech."""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import requests
from openai import OpenAI, OpenAIError

from ..config import EndpointKind, Settings
from ..utils import warn


class OpenAIProvider:
    """Stateless per call; one instance lives for the whole invocation.

    ``post_json`` goes through ``requests`` so the exact payload and the raw
    status/body are preserved. Speech synthesis uses the SDK client, which can
    be injected to ease testing.
    """

    def __init__(self, settings: Settings, client: Optional[Any] = None):
        self.settings = settings
        self._client = client

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }

    def _build_client(self):
        if self._client is not None:
            return self._client
        self._client = OpenAI(
            api_key=self.settings.api_key,
            base_url=self.settings.base_url,
            timeout=self.settings.timeout,
        )
        return self._client

    def post_json(self, kind: EndpointKind, payload: Dict[str, Any]) -> Tuple[int, str]:
        """POST ``payload`` to the endpoint for ``kind``.

        Non-2xx answers are returned like any other; network errors raise
        ``requests.RequestException``.
        """
        url = self.settings.endpoint_url(kind)
        resp = requests.post(url, headers=self._headers(), json=payload, timeout=self.settings.timeout)
        return resp.status_code, resp.text

    def synthesize_speech(self, text: str) -> Optional[bytes]:
        try:
            client = self._build_client()
            resp = client.audio.speech.create(
                model=self.settings.tts_model,
                voice=self.settings.tts_voice,
                input=text,
                response_format="wav",
            )
        except OpenAIError as e:
            warn(f"speech request failed: {e}")
            return None
        data = resp.content if hasattr(resp, "content") else resp.read()
        return data or None
