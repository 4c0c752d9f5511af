from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings

from eve.pipeline_config import ProcessingMode


class Settings(BaseSettings):
    """EVE runtime settings, read from the environment or a .env file.

    Without ``ANTHROPIC_API_KEY`` the pipeline runs heuristic-only; without
    ``ASSEMBLYAI_API_KEY`` audio upload is disabled.
    """

    # API Keys
    anthropic_api_key: str = ""
    assemblyai_api_key: str = ""  # Optional, /api/transcribe returns 501 if absent

    # Language model
    llm_model: str = "claude-3-5-haiku-20241022"
    llm_max_tokens: int = 2000
    llm_timeout_seconds: float = 60.0

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    processing_mode: ProcessingMode = ProcessingMode.AUTO

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def model_available(self) -> bool:
        """True when the model-backed extractor has credentials to run with."""
        return bool(self.anthropic_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build Settings once per process; a broken .env falls back to the environment."""
    try:
        return Settings()
    except Exception:
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
