from typing import ClassVar

from docanalytics.classification.inference.base import BaseInferenceClient
from docanalytics.classification.inference.chat_inference import ChatInferenceClient
from docanalytics.classification.inference.example_client_adapter import ExampleClientAdapter
from docanalytics.classification.inference.huggingface_client_adapter import (
    HuggingFaceClientAdapter,
)
from docanalytics.classification.inference.openai_client_adapter import OpenAIClientAdapter
from docanalytics.config.settings import Settings


class InferenceClientFactory:
    """Creates the configured external inference client, or None when disabled."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseInferenceClient | None:
        """Create the inference client named by settings.inference_provider.

        Raises:
            ValueError: for an unknown provider.
            InferenceUnavailableError: if the provider needs an API key that is missing.
        """
        provider = settings.inference_provider.lower()
        if provider in ("", "none"):
            return None
        if provider == "example":
            return ChatInferenceClient(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
                name="example",
            )
        if provider == "huggingface":
            return HuggingFaceClientAdapter(
                api_key=settings.inference_huggingface_api_key,
                model=settings.inference_huggingface_model_name,
                base_url=settings.inference_huggingface_base_url,
                timeout_seconds=settings.inference_huggingface_timeout_seconds,
            )
        base_url = cls._resolve_base_url(provider, settings)
        client = OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=cls._resolve_timeout_seconds(provider, settings),
            base_url=base_url,
        )
        return ChatInferenceClient(
            client=client,
            model=cls._resolve_model_name(provider, settings),
            temperature=cls._resolve_temperature(provider, settings),
            name=provider,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.inference_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "inference_openai_compatible_base_url is required for "
                    "inference_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "none",
            "example",
            "openai",
            "openai_compatible",
            "huggingface",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown inference provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.inference_openai_api_key,
            "openai_compatible": settings.inference_openai_compatible_api_key,
            "openrouter": settings.inference_openrouter_api_key,
            "groq": settings.inference_groq_api_key,
            "together": settings.inference_together_api_key,
            "ollama": settings.inference_ollama_api_key,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.inference_openai_model_name,
            "openai_compatible": settings.inference_openai_compatible_model_name,
            "openrouter": settings.inference_openrouter_model_name,
            "groq": settings.inference_groq_model_name,
            "together": settings.inference_together_model_name,
            "ollama": settings.inference_ollama_model_name,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_timeout_seconds(cls, provider: str, settings: Settings) -> int:
        key_map = {
            "openai": settings.inference_openai_timeout_seconds,
            "openai_compatible": settings.inference_openai_compatible_timeout_seconds,
            "openrouter": settings.inference_openrouter_timeout_seconds,
            "groq": settings.inference_groq_timeout_seconds,
            "together": settings.inference_together_timeout_seconds,
            "ollama": settings.inference_ollama_timeout_seconds,
        }
        return key_map.get(provider, 30) or 30

    @classmethod
    def _resolve_temperature(cls, provider: str, settings: Settings) -> float:
        if provider == "openai":
            return settings.inference_openai_temperature
        return 0.0
