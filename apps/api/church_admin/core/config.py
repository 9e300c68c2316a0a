from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "dev"
    auth_mode: str = "jwt"  # jwt | none
    root_path: str = ""
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_days: int = 180

    # Explicit URL wins over the postgres_* parts (e.g. sqlite for local runs).
    database_url_override: str = ""
    postgres_db: str = "church_admin"
    postgres_user: str = "church_user"
    postgres_password: str = "church_pass"
    postgres_host: str = "db"
    postgres_port: int = 5432

    upload_dir: str = "./uploads"
    public_base_url: str = ""
    max_upload_bytes: int = 5 * 1024 * 1024

    # Push gateway (opaque; notifications are delivered by an external service)
    push_gateway_url: str = ""
    push_gateway_token: str = ""
    push_broadcast_topic: str = "all"
    push_timeout_seconds: float = 10.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
