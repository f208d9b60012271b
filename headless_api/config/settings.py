from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Bypasses RLS; preferred for server-side table access

    # App
    app_name: str = "headless-api"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    api_prefix: str = "/api"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    # Sessions (admin side)
    session_cookie_name: str = "session_token"
    session_cookie_secure: bool = True
    session_cookie_samesite: str = "strict"  # strict | lax
    session_ttl_minutes: Optional[int] = None  # None = sessions never expire

    # Generated secrets
    bcrypt_rounds: int = 12
    service_id_length: int = 16
    api_key_length: int = 32
    session_token_length: int = 32
    generated_password_length: int = 16

    # Email
    email_backend: str = "console"  # console | smtp
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    email_from_address: str = "no-reply@localhost"
    email_from_name: str = "no reply"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
