import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


DEFAULT_RATE_LIMITS = {
    "login_mobile": {"limit": 5, "window_minutes": 15},
    "validate_password": {"limit": 5, "window_minutes": 15},
    "change_password": {"limit": 5, "window_minutes": 15},
    "change_coercion_password": {"limit": 5, "window_minutes": 15},
}


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./ampara.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["*"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", False)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")

    # Credentials
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    SESSION_TTL_HOURS = int(data.get("SESSION_TTL_HOURS", 24))
    REFRESH_TTL_DAYS = int(data.get("REFRESH_TTL_DAYS", 30))
    REVOKE_CHAIN_ON_REFRESH_REUSE = bool(data.get("REVOKE_CHAIN_ON_REFRESH_REUSE", False))
    LEGACY_IDENTIFIER_AUTH_ENABLED = bool(data.get("LEGACY_IDENTIFIER_AUTH_ENABLED", True))
    RATE_LIMITS = {**DEFAULT_RATE_LIMITS, **data.get("RATE_LIMITS", {})}

    # Alerts and monitoring
    ESCALATION_WINDOW_SECONDS = int(data.get("ESCALATION_WINDOW_SECONDS", 60))
    MAX_SCHEDULE_MINUTES_PER_DAY = int(data.get("MAX_SCHEDULE_MINUTES_PER_DAY", 480))
    TRACKING_BASE_URL = data.get("TRACKING_BASE_URL", "http://localhost:8080")

    # Object storage and signed media links
    STORAGE_ROOT = data.get("STORAGE_ROOT", os.path.join(ROOT_PATH, "storage"))
    PUBLIC_BASE_URL = data.get("PUBLIC_BASE_URL", "http://localhost:8000")
    SIGNED_URL_TTL_SECONDS = int(data.get("SIGNED_URL_TTL_SECONDS", 900))

    # Outbound channels (empty URL disables the channel)
    GUARDIAN_WEBHOOK_URL = data.get("GUARDIAN_WEBHOOK_URL", "")
    VOICE_DISPATCH_URL = data.get("VOICE_DISPATCH_URL", "")
    TRANSCRIPTION_WEBHOOK_URL = data.get("TRANSCRIPTION_WEBHOOK_URL", "")
    OUTBOUND_TIMEOUT_SECONDS = float(data.get("OUTBOUND_TIMEOUT_SECONDS", 10))
