from functools import lru_cache
from typing import Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class MongoDBConfig(BaseModel):
    host: str
    user: str
    passwd: str
    port: int
    db: str


class JwtConfig(BaseModel):
    secret_key: str
    algorithm: str = "HS256"
    expire_minutes: int = 60
    # 외부 identity provider가 iss를 발급하는 경우에만 설정
    issuer: Optional[str] = None


class Settings(BaseSettings):
    """
    기본 Configuration
    """

    mongodb: MongoDBConfig
    jwt: JwtConfig

    model_config = SettingsConfigDict(
        env_file="whiteboard/config/.env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )


@lru_cache
def get_settings():
    return Settings()


settings: Settings = get_settings()
