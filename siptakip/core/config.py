"""Application configuration."""

from os import getenv
from pathlib import Path

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the API and the staff client."""

    app_name: str = "SipTakip API"
    app_env: str = getenv("APP_ENV", "dev")
    port: int = int(getenv("PORT", "8000"))
    log_level: str = getenv("LOG_LEVEL", "INFO")
    database_url: str = getenv("DATABASE_URL", "sqlite:///./siptakip.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "10080"))
    customer_token_hours: int = int(getenv("CUSTOMER_TOKEN_HOURS", "24"))
    frontend_url: str = getenv("FRONTEND_URL", "http://localhost:8501")
    smtp_host: str = getenv("SMTP_HOST", "")
    smtp_port: int = int(getenv("SMTP_PORT", "587"))
    smtp_user: str = getenv("SMTP_USER", "")
    smtp_password: str = getenv("SMTP_PASSWORD", "")
    smtp_use_tls: bool = getenv("SMTP_USE_TLS", "1") == "1"
    sender_email: str = getenv("SENDER_EMAIL", "no-reply@siptakip.local")
    sender_name: str = getenv("SENDER_NAME", "SipTakip")
    report_utc_offset_hours: int = int(getenv("REPORT_UTC_OFFSET_HOURS", "3"))
    uploads_dir: Path = Path(getenv("UPLOADS_DIR", "./uploads"))
    seed_demo_data: bool = getenv("SEED_DEMO_DATA", "1" if getenv("APP_ENV", "dev") == "dev" else "0") == "1"
    admin_password: str = getenv("ADMIN_PASSWORD", "12345")
    api_base_url: str = getenv("SIPTAKIP_API_URL", "http://localhost:8000/api/v1")
    client_storage_dir: Path = Path(getenv("SIPTAKIP_CLIENT_STORAGE", str(Path.home() / ".siptakip")))
    client_timeout_seconds: float = float(getenv("SIPTAKIP_CLIENT_TIMEOUT", "10"))
    poll_interval_seconds: float = float(getenv("SIPTAKIP_POLL_SECONDS", "5"))

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.frontend_url.split(",") if origin.strip()]


settings: Settings = Settings()
