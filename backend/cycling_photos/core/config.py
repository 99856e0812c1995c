from functools import lru_cache
from pathlib import Path
from typing import List, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[2]


def _default_sqlite_url() -> str:
	db_path = BASE_DIR / "cycling_photos.db"
	return f"sqlite+aiosqlite:///{db_path.as_posix()}"


class Settings(BaseSettings):
	model_config = SettingsConfigDict(
		env_file=str(BASE_DIR / ".env"),
		env_file_encoding="utf-8",
		extra="ignore",
	)

	PROJECT_NAME: str = "Cycling Photo Classification API"
	API_V1_STR: str = "/api/v1"
	ENVIRONMENT: Literal["development", "test", "preview", "production"] = "development"
	LOG_LEVEL: str = "INFO"

	DATABASE_URL: str = _default_sqlite_url()
	DATABASE_ECHO: bool = False

	STORAGE_BACKEND: Literal["local", "s3"] = "local"
	STORAGE_LOCAL_DIR: str = str(BASE_DIR / "storage")
	STORAGE_PUBLIC_BASE_URL: str = "http://localhost:8000/static"

	AWS_REGION: str = ""
	S3_BUCKET: str = ""
	S3_ENDPOINT_URL: str = ""
	AWS_ACCESS_KEY_ID: str = ""
	AWS_SECRET_ACCESS_KEY: str = ""
	CDN_URL: str = ""

	MAX_UPLOAD_FILES: int = Field(default=50, ge=1)
	MAX_UPLOAD_FILE_SIZE: int = Field(default=10 * 1024 * 1024, ge=1)
	DEFAULT_PAGE_SIZE: int = Field(default=20, ge=1, le=100)

	CORS_ORIGINS: List[str] = Field(
		default_factory=lambda: [
			"http://localhost:3000",
			"http://127.0.0.1:3000",
			"http://localhost:5173",
			"http://127.0.0.1:5173",
		]
	)

	@model_validator(mode="after")
	def _check_storage(self) -> "Settings":
		if self.STORAGE_BACKEND == "s3" and not self.S3_BUCKET:
			raise ValueError("S3_BUCKET is required when STORAGE_BACKEND is 's3'")
		return self

	@property
	def is_development(self) -> bool:
		return self.ENVIRONMENT == "development"


@lru_cache
def get_settings() -> Settings:
	return Settings()
