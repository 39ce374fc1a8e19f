from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    APP_NAME: str = "VeMeet API"
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Session cookie (token may also be sent as a bearer header)
    ACCESS_TOKEN_COOKIE_NAME: str = "access_token"
    COOKIE_SECURE: bool = True

    # Discovery / pagination
    POTENTIAL_MATCHES_PAGE_SIZE: int = 4
    MAX_PAGE_SIZE: int = 50
    MATCHES_PAGE_SIZE: int = 100
    # Keeps OFFSET well inside bigint
    MAX_PAGE_NUMBER: int = 10_000
    MATCH_RECIPROCAL_PREFERENCES: bool = True

    # Attempts per swipe transaction before giving up with 409
    SWIPE_MAX_ATTEMPTS: int = 3

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
