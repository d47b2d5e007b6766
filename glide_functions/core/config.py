import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    openai_base_url: str = "https://api.openai.com"
    anthropic_base_url: str = "https://api.anthropic.com"
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    anthropic_version: str = "2023-06-01"
    openai_default_model: str = "gpt-4o-mini"
    anthropic_default_model: str = "claude-3-5-sonnet-20241022"
    gemini_default_model: str = "gemini-1.5-flash"
    default_max_tokens: int = 1000
    default_temperature: float = 0.7
    # 0 disables the client-side timeout; the host platform enforces its own
    request_timeout: float = 0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openai_base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com"),
            anthropic_base_url=os.getenv("ANTHROPIC_BASE_URL", "https://api.anthropic.com"),
            gemini_base_url=os.getenv(
                "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com"
            ),
            anthropic_version=os.getenv("ANTHROPIC_VERSION", "2023-06-01"),
            openai_default_model=os.getenv("OPENAI_DEFAULT_MODEL", "gpt-4o-mini"),
            anthropic_default_model=os.getenv(
                "ANTHROPIC_DEFAULT_MODEL", "claude-3-5-sonnet-20241022"
            ),
            gemini_default_model=os.getenv("GEMINI_DEFAULT_MODEL", "gemini-1.5-flash"),
            default_max_tokens=int(os.getenv("DEFAULT_MAX_TOKENS", "1000")),
            default_temperature=float(os.getenv("DEFAULT_TEMPERATURE", "0.7")),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "0")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @property
    def http_timeout(self) -> float | None:
        return self.request_timeout if self.request_timeout > 0 else None


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
