from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    app_env: str = "development"  # development, staging, production

    # CORS origins as comma-separated values
    # Example: "https://app.example.com,https://admin.example.com"
    cors_allow_origins: str = "http://localhost:5173"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Email verification codes
    otp_expiry_minutes: int = 10

    # When true, application status may only move one pipeline step forward
    # (or to REJECTED). Default keeps the permissive behaviour dashboards rely on.
    strict_status_transitions: bool = False

    # Request guards
    rate_limit_auth_per_min: int = 20
    rate_limit_apply_per_min: int = 30

    # Admin seed (python -m app.scripts.seed_admin)
    admin_email: str = "admin@legaforce.com"
    admin_password: str = "admin123"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def is_development(self) -> bool:
        return (self.app_env or "").lower() == "development"


settings = Settings()
