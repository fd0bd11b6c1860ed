import httpx
import openai

from docanalytics.classification.exceptions import (
    InferenceResponseError,
    InferenceUnavailableError,
)
from docanalytics.classification.inference.client_base import BaseChatClient


class OpenAIClientAdapter(BaseChatClient):
    """Chat client adapter built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        if not api_key:
            raise InferenceUnavailableError("AI provider API key is not configured")
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "classification_result",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise InferenceUnavailableError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise InferenceUnavailableError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise InferenceResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise InferenceResponseError("AI returned empty response")
        return content
