from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_name: str = "premium-landscaping"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    database_url: str
    redis_url: str = "redis://redis:6379/0"

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_exp_minutes: int = 60

    # Web3Forms form relay for quote requests
    relay_url: str = "https://api.web3forms.com/submit"
    relay_access_key: str = "f4e47d1c-e7d1-4f4d-a5c5-1234567890ab"
    relay_timeout_s: float = 10.0

    # uploaded images: "local" writes under media_dir, "s3" puts to s3_bucket
    storage_backend: str = "local"
    media_dir: str = "./media"
    media_url_prefix: str = "/media"
    s3_bucket: str | None = None
    s3_region: str | None = None
    s3_public_base_url: str | None = None

settings = Settings()
