"""Classification through a chat completion provider."""

import json
from collections.abc import Sequence
from pathlib import Path

from docanalytics.classification.exceptions import InferenceResponseError
from docanalytics.classification.inference.base import BaseInferenceClient
from docanalytics.classification.inference.client_base import BaseChatClient
from docanalytics.classification.inference.prompt_loader import (
    load_json_schema,
    load_prompt_template,
)
from docanalytics.classification.inference.validator import validate_and_build
from docanalytics.classification.models import InferenceLabel
from docanalytics.logging.logger import Log

SYSTEM_PROMPT = "You are a document classification assistant. Reply with JSON only."


class ChatInferenceClient(BaseInferenceClient):
    """Asks a chat model to pick one label for a document."""

    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        temperature: float = 0.1,
        name: str = "openai",
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self.name = name
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema = json.loads(load_json_schema(json_schema_path))

    def classify(self, text: str, *, labels: Sequence[str]) -> InferenceLabel:
        prompt = self._prompt_template.format(
            labels="\n".join(f"- {label}" for label in labels),
            document_text=text,
        )
        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=SYSTEM_PROMPT,
            user_prompt=prompt,
            json_schema=self._json_schema,
        )
        Log.debug(f"Inference raw response:\n{raw_response}")
        return validate_and_build(self._parse_json(raw_response))

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise InferenceResponseError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise InferenceResponseError("JSON response must be an object")
        return parsed
