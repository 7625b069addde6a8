from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AUTH_", env_file=".env", extra="ignore")

    secret: str = "orderdesk-change-me"
    jwt_lifetime_seconds: int = 3600
    jwt_audience: str = "fastapi-users:auth"


auth_config = AuthConfig()
