from typing import List, Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./paper_review.db"
    database_echo: bool = False

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Пароль администратора; если не задан, вход администратора невозможен
    admin_password: Optional[str] = None

    # Хранилище файлов: локальный диск или S3-совместимое хранилище
    storage_backend: Literal["local", "s3"] = "local"
    upload_dir: str = "uploads"
    uploads_url_prefix: str = "/uploads"

    s3_bucket: Optional[str] = None
    s3_region: Optional[str] = None
    s3_endpoint_url: Optional[str] = None
    s3_access_key: Optional[str] = None
    s3_secret_key: Optional[str] = None
    s3_prefix: str = "papers"
    s3_public_url: Optional[str] = None

    # Префикс маршрутов API, например "/api"
    api_prefix: str = ""

    cors_origins: List[str] = ["*"]

    log_level: str = "INFO"
    log_format: Literal["plain", "json"] = "plain"

    model_config = {"env_file": ".env", "extra": "ignore"}
