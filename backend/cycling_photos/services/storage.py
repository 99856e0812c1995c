from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from cycling_photos.core.config import Settings, get_settings
from cycling_photos.core.errors import AppError
from cycling_photos.domain.ports import StorageAdapter, UploadResult

logger = logging.getLogger(__name__)


class LocalStorageAdapter:
	"""Stores objects as files below ``root``; keys map to relative paths."""

	def __init__(self, root: str | Path, public_base_url: str) -> None:
		self.root = Path(root)
		self.public_base_url = public_base_url.rstrip("/")

	def _path_for(self, key: str) -> Path:
		path = (self.root / key).resolve()
		if not path.is_relative_to(self.root.resolve()):
			raise AppError.internal("storage.invalid_key", {"key": key})
		return path

	async def upload(self, data: bytes, key: str, content_type: str) -> UploadResult:
		path = self._path_for(key)
		try:
			await asyncio.to_thread(self._write, path, data)
		except OSError as exc:
			logger.error("Failed to upload file: %s", key, exc_info=exc)
			raise AppError.external_service("LocalStorage", exc) from exc
		return UploadResult(key=key, url=self.get_public_url(key))

	@staticmethod
	def _write(path: Path, data: bytes) -> None:
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_bytes(data)

	def get_public_url(self, key: str) -> str:
		return f"{self.public_base_url}/{key}"

	async def delete(self, key: str) -> None:
		path = self._path_for(key)
		try:
			await asyncio.to_thread(path.unlink, missing_ok=True)
		except OSError as exc:
			logger.error("Failed to delete file: %s", key, exc_info=exc)
			raise AppError.external_service("LocalStorage", exc) from exc


class S3StorageAdapter:
	"""S3 or S3-compatible (e.g. Backblaze B2) object storage through boto3."""

	def __init__(
		self,
		bucket: str,
		region: str = "",
		endpoint_url: str = "",
		access_key_id: str = "",
		secret_access_key: str = "",
		cdn_url: str = "",
		client=None,
	) -> None:
		self.bucket = bucket
		self.region = region
		self.endpoint_url = endpoint_url.rstrip("/")
		self.cdn_url = cdn_url.rstrip("/")
		self.client = client or boto3.client(
			"s3",
			region_name=region or None,
			endpoint_url=endpoint_url or None,
			aws_access_key_id=access_key_id or None,
			aws_secret_access_key=secret_access_key or None,
		)

	async def upload(self, data: bytes, key: str, content_type: str) -> UploadResult:
		try:
			await asyncio.to_thread(
				self.client.put_object,
				Bucket=self.bucket,
				Key=key,
				Body=data,
				ContentType=content_type,
			)
		except (BotoCoreError, ClientError) as exc:
			logger.error("Failed to upload file: %s", key, exc_info=exc)
			raise AppError.external_service("S3", exc) from exc
		return UploadResult(key=key, url=self.get_public_url(key))

	def get_public_url(self, key: str) -> str:
		if self.cdn_url:
			return f"{self.cdn_url}/{key}"
		if self.endpoint_url:
			return f"{self.endpoint_url}/{self.bucket}/{key}"
		region = self.region or "us-east-1"
		return f"https://{self.bucket}.s3.{region}.amazonaws.com/{key}"

	async def delete(self, key: str) -> None:
		try:
			await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=key)
		except (BotoCoreError, ClientError) as exc:
			logger.error("Failed to delete file: %s", key, exc_info=exc)
			raise AppError.external_service("S3", exc) from exc


def build_storage_adapter(settings: Settings) -> StorageAdapter:
	if settings.STORAGE_BACKEND == "s3":
		return S3StorageAdapter(
			bucket=settings.S3_BUCKET,
			region=settings.AWS_REGION,
			endpoint_url=settings.S3_ENDPOINT_URL,
			access_key_id=settings.AWS_ACCESS_KEY_ID,
			secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
			cdn_url=settings.CDN_URL,
		)
	return LocalStorageAdapter(settings.STORAGE_LOCAL_DIR, settings.STORAGE_PUBLIC_BASE_URL)


@lru_cache
def get_storage_adapter() -> StorageAdapter:
	return build_storage_adapter(get_settings())
