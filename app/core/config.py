from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BUSINESS_NAME: str = "Your Barbershop"
    BUSINESS_TIMEZONE: str = "America/Sao_Paulo"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    RECORD_STORE: str = "memory"
    SUPABASE_URL: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    SUPABASE_TIMEOUT_SECONDS: float = 10.0

    AUTH_PROVIDER: str = "static"
    DEV_ROLE: str = "staff"

    # Hardening extensions, both off to keep the unguarded behavior by default.
    STRICT_TRANSITIONS: bool = False
    UNIQUE_SLOTS: bool = False

    DEFAULT_PROVIDER_SPECIALTY: str = "Barber"


settings = Settings()
