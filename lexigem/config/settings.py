from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    pdf_max_pages: int = 10
    pdf_render_scale: float = 2.0
    max_password_attempts: int = 3
    max_upload_bytes: int = 12 * 1024 * 1024

    response_language: str = "English"

    analysis_provider: str = "gemini"
    analysis_temperature: float = 0.2
    analysis_max_attempts: int = 3
    analysis_backoff_seconds: float = 1.0
    chat_retry_delay_seconds: float = 1.2

    analysis_gemini_api_key: str = ""
    analysis_gemini_model_name: str = "gemini-2.5-pro"
    analysis_gemini_timeout_seconds: int = 120

    analysis_openai_api_key: str = ""
    analysis_openai_model_name: str = "gpt-4o"
    analysis_openai_timeout_seconds: int = 120

    analysis_openai_compatible_api_key: str = ""
    analysis_openai_compatible_model_name: str = ""
    analysis_openai_compatible_base_url: str = ""
    analysis_openai_compatible_timeout_seconds: int = 120

    analysis_openrouter_api_key: str = ""
    analysis_openrouter_model_name: str = ""
    analysis_openrouter_timeout_seconds: int = 120

    supabase_url: str = ""
    supabase_api_key: str = ""
    supabase_storage_bucket: str = "documents"
