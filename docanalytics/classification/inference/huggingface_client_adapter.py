from collections.abc import Sequence
from typing import Any

import httpx

from docanalytics.classification.exceptions import (
    InferenceResponseError,
    InferenceUnavailableError,
)
from docanalytics.classification.inference.base import BaseInferenceClient
from docanalytics.classification.models import InferenceLabel


class HuggingFaceClientAdapter(BaseInferenceClient):
    """Zero-shot classification through the Hugging Face inference API."""

    name = "huggingface"

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str,
        timeout_seconds: int,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not api_key:
            raise InferenceUnavailableError("Hugging Face API key is not configured")
        self._url = f"{base_url.rstrip('/')}/models/{model}"
        self._headers = {"Authorization": f"Bearer {api_key}"}
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout_seconds)

    def close(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "HuggingFaceClientAdapter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def classify(self, text: str, *, labels: Sequence[str]) -> InferenceLabel:
        payload = {"inputs": text, "parameters": {"candidate_labels": list(labels)}}
        try:
            response = self._http.post(self._url, json=payload, headers=self._headers)
            response.raise_for_status()
        except (httpx.TimeoutException, httpx.TransportError) as exc:
            raise InferenceUnavailableError(f"Hugging Face network error: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            raise InferenceUnavailableError(
                f"Hugging Face API error: {exc.response.status_code}"
            ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise InferenceResponseError(f"Invalid JSON response: {exc}") from exc
        return self._best_label(data)

    @staticmethod
    def _best_label(data: Any) -> InferenceLabel:
        """Accepts ``{"labels": [...], "scores": [...]}`` or ``[{"label", "score"}, ...]``."""
        if isinstance(data, dict) and isinstance(data.get("labels"), list):
            pairs = list(zip(data["labels"], data.get("scores") or []))
        elif isinstance(data, list):
            pairs = [
                (item.get("label"), item.get("score"))
                for item in data
                if isinstance(item, dict)
            ]
        else:
            raise InferenceResponseError("Unexpected Hugging Face response shape")

        valid = [
            (label, float(score))
            for label, score in pairs
            if isinstance(label, str) and isinstance(score, (int, float))
        ]
        if not valid:
            raise InferenceResponseError("Hugging Face response has no labels")
        label, score = max(valid, key=lambda pair: pair[1])
        return InferenceLabel(label=label, score=score)
