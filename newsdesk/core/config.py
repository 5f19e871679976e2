from pathlib import Path
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# -------------------------------------------------
# Explicitly load .env (CRITICAL)
# -------------------------------------------------

BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_PATH = BASE_DIR / ".env"

load_dotenv(dotenv_path=ENV_PATH)


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ENVIRONMENT: str = "development"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ALGORITHM: str = "HS256"
    DB_ECHO: bool = False

    # S3-compatible object storage (Cloudflare R2, MinIO, AWS). Leave bucket empty to disable uploads.
    S3_ENDPOINT_URL: str = Field(default="", validation_alias=AliasChoices("S3_ENDPOINT_URL", "R2_ENDPOINT_URL"))
    S3_ACCESS_KEY_ID: str | None = Field(default=None, validation_alias=AliasChoices("S3_ACCESS_KEY_ID", "AWS_ACCESS_KEY_ID"))
    S3_SECRET_ACCESS_KEY: str | None = Field(
        default=None, validation_alias=AliasChoices("S3_SECRET_ACCESS_KEY", "AWS_SECRET_ACCESS_KEY")
    )
    S3_REGION: str = "auto"
    S3_BUCKET_NAME: str = Field(default="", validation_alias=AliasChoices("S3_BUCKET_NAME", "R2_BUCKET_NAME"))
    S3_PUBLIC_URL: str = Field(default="", validation_alias=AliasChoices("S3_PUBLIC_URL", "R2_PUBLIC_URL"))
    S3_PRESIGN_EXPIRES_HOURS: int = Field(default=1, description="Lifetime of presigned upload URLs in hours")

    # Local staging directory for images before they are pushed to object storage
    UPLOAD_TEMP_DIR: str = "./temp/content"

    # Seeded on startup when the users table is empty
    DEFAULT_ADMIN_NAME: str = "Admin"
    DEFAULT_ADMIN_EMAIL: str = "admin@mail.com"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    class Config:
        extra = "ignore"
        env_file = str(ENV_PATH)
        env_file_encoding = "utf-8"


settings = Settings()
