from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "docanalytics"
    db_username: str = "docanalytics"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: float = 10.0

    store_backend: str = "memory"
    files_root: str = "./files"

    pdf_engine: str = "pdfplumber"
    default_language: str = "en"

    taxonomy_path: str = ""
    classification_method: str = "hybrid"
    ingest_max_workers: int = 4

    inference_provider: str = "none"
    inference_max_chars: int = 4000

    inference_openai_api_key: str = ""
    inference_openai_model_name: str = "gpt-4o-mini"
    inference_openai_timeout_seconds: int = 30
    inference_openai_temperature: float = 0.1

    inference_openai_compatible_api_key: str = ""
    inference_openai_compatible_model_name: str = ""
    inference_openai_compatible_timeout_seconds: int = 30
    inference_openai_compatible_base_url: str = ""

    inference_openrouter_api_key: str = ""
    inference_openrouter_model_name: str = ""
    inference_openrouter_timeout_seconds: int = 30

    inference_groq_api_key: str = ""
    inference_groq_model_name: str = ""
    inference_groq_timeout_seconds: int = 30

    inference_together_api_key: str = ""
    inference_together_model_name: str = ""
    inference_together_timeout_seconds: int = 30

    inference_ollama_api_key: str = "ollama"
    inference_ollama_model_name: str = ""
    inference_ollama_timeout_seconds: int = 60

    inference_huggingface_api_key: str = ""
    inference_huggingface_model_name: str = "facebook/bart-large-mnli"
    inference_huggingface_base_url: str = "https://api-inference.huggingface.co"
    inference_huggingface_timeout_seconds: int = 30
