from pydantic import BaseModel
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_DEFAULT_SECRET = "change-me-in-production-please"

# Load .env file if it exists (before reading os.getenv)
_env_path = Path(__file__).resolve().parent.parent / ".env"
if _env_path.exists():
    with open(_env_path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                # Only set if not already in environment (env vars take precedence)
                if key not in os.environ:
                    os.environ[key] = value


def _sanitize_ascii(val: str) -> str:
    """Strip non-ASCII characters from config values (prevents encoding errors)"""
    return val.encode('ascii', errors='ignore').decode('ascii').strip()


def _default_database_url() -> str:
    db_path = Path(__file__).resolve().parent.parent / "data" / "skybook.db"
    return f"sqlite+aiosqlite:///{db_path}"


class Settings(BaseModel):
    # Network
    http_host: str = os.getenv("HTTP_HOST", "0.0.0.0")
    http_port: int = int(os.getenv("HTTP_PORT", "8000"))

    # Chat model (any OpenAI-compatible endpoint)
    openai_api_key: str = _sanitize_ascii(os.getenv("OPENAI_API_KEY", ""))
    openai_base_url: str = _sanitize_ascii(os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"))
    openai_chat_model: str = _sanitize_ascii(os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini"))

    # Weather tool (https://openweathermap.org/api)
    openweathermap_api_key: str = _sanitize_ascii(os.getenv("OPENWEATHERMAP_API_KEY", ""))
    weather_lang: str = _sanitize_ascii(os.getenv("WEATHER_LANG", "en"))

    # Storage
    database_url: str = os.getenv("DATABASE_URL", _default_database_url())

    # Auth
    secret_key: str = os.getenv("SECRET_KEY", _DEFAULT_SECRET)
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")

    # Turn loop limits
    max_tool_rounds: int = int(os.getenv("MAX_TOOL_ROUNDS", "10"))
    tool_timeout_s: float = float(os.getenv("TOOL_TIMEOUT_S", "20"))


settings = Settings()


def check_secret_key():
    """Refuse to start the server with the weak default SECRET_KEY."""
    if settings.secret_key == _DEFAULT_SECRET or len(settings.secret_key) < 16:
        raise SystemExit(
            "FATAL: SECRET_KEY is weak or default! "
            "Set a strong SECRET_KEY (>=16 chars) in .env before starting the server."
        )


def log_config():
    _oai_key = '***' + settings.openai_api_key[-4:] if len(settings.openai_api_key) > 4 else 'EMPTY'
    _owm_key = 'set' if settings.openweathermap_api_key else 'EMPTY'
    logger.info(f"Config: chat → {settings.openai_base_url} (key={_oai_key}), model={settings.openai_chat_model}")
    logger.info(f"Config: weather key={_owm_key}, db={settings.database_url}")
    logger.info(f"Config: max_tool_rounds={settings.max_tool_rounds}, tool_timeout={settings.tool_timeout_s}s")
