from datetime import datetime, timezone
from typing import TypeVar

from cycling_photos.core.context import RequestContext
from cycling_photos.core.messages import resolve_message
from cycling_photos.schemas.common import ApiResponse, ResponseMeta

T = TypeVar("T")


def iso_now() -> str:
	return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def envelope(data: T, ctx: RequestContext, message_key: str | None = None) -> ApiResponse[T]:
	return ApiResponse(
		data=data,
		meta=ResponseMeta(
			request_id=ctx.request_id,
			timestamp=iso_now(),
			message=resolve_message(message_key) if message_key else None,
		),
	)
