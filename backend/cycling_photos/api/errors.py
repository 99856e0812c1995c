"""Request id propagation and the error half of the response envelope."""

import logging
import traceback
import uuid
from http import HTTPStatus
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cycling_photos.api.envelope import iso_now
from cycling_photos.core.errors import AppError, ErrorCode
from cycling_photos.core.messages import resolve_message
from cycling_photos.schemas.common import ApiErrorResponse, ErrorDetail, ErrorMeta

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie", "form", "file"}


def _request_id(request: Request) -> str:
	request_id = getattr(request.state, "request_id", None)
	if request_id is None:
		request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
		request.state.request_id = request_id
	return request_id


def _is_development(request: Request) -> bool:
	settings = getattr(request.app.state, "settings", None)
	return bool(settings and settings.is_development)


def _stack(exc: BaseException) -> str:
	return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def error_response(
	request: Request,
	status_code: int,
	code: str,
	message: str,
	should_throw: bool = False,
	fields: Dict[str, List[str]] | None = None,
	details: Any = None,
	exc: BaseException | None = None,
) -> JSONResponse:
	request_id = _request_id(request)
	detail = ErrorDetail(code=code, message=message, should_throw=should_throw, fields=fields)
	if _is_development(request):
		detail.details = details
		detail.stack = _stack(exc) if exc is not None else None

	body = ApiErrorResponse(
		error=detail,
		meta=ErrorMeta(request_id=request_id, timestamp=iso_now(), path=request.url.path),
	)
	if status_code >= 500:
		logger.error(
			"%s %s - %s [request_id=%s]",
			request.method,
			request.url.path,
			status_code,
			request_id,
			exc_info=exc,
		)
	else:
		logger.warning(
			"%s %s - %s %s [request_id=%s]",
			request.method,
			request.url.path,
			status_code,
			code,
			request_id,
		)
	return JSONResponse(
		status_code=status_code,
		content=jsonable_encoder(body.model_dump(by_alias=True, exclude_none=True)),
		headers={REQUEST_ID_HEADER: request_id},
	)


def validation_fields(errors) -> Dict[str, List[str]]:
	fields: Dict[str, List[str]] = {}
	for error in errors:
		loc = [str(part) for part in error.get("loc", ())]
		if loc and loc[0] in _LOCATION_ROOTS:
			loc = loc[1:]
		name = ".".join(loc) or "_root"
		fields.setdefault(name, []).append(error.get("msg", "Invalid value"))
	return fields


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
	return error_response(
		request,
		exc.status_code,
		exc.code.value,
		resolve_message(exc.message_key, exc.context),
		should_throw=exc.should_throw,
		fields=exc.fields,
		details=exc.context,
		exc=exc,
	)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
	return await app_error_handler(request, AppError.validation_failed(validation_fields(exc.errors())))


def _http_error_code(status_code: int) -> str:
	"""Client errors keep a code named after their status, server errors are INTERNAL."""
	if status_code == 404:
		return ErrorCode.NOT_FOUND.value
	if status_code == 400:
		return ErrorCode.VALIDATION_FAILED.value
	if 400 <= status_code < 500:
		try:
			return HTTPStatus(status_code).name
		except ValueError:
			return "CLIENT_ERROR"
	return ErrorCode.INTERNAL.value


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
	code = _http_error_code(exc.status_code)
	message = exc.detail if isinstance(exc.detail, str) else resolve_message(f"errors.{code}")
	return error_response(request, exc.status_code, code, message, details=exc.detail, exc=exc)


def register_error_handling(app: FastAPI) -> None:
	app.add_exception_handler(AppError, app_error_handler)
	app.add_exception_handler(RequestValidationError, request_validation_handler)
	app.add_exception_handler(StarletteHTTPException, http_exception_handler)

	@app.middleware("http")
	async def request_id_middleware(request: Request, call_next):
		request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
		request.state.request_id = request_id
		try:
			response = await call_next(request)
		except Exception as exc:
			response = error_response(
				request,
				500,
				ErrorCode.INTERNAL.value,
				resolve_message("errors.INTERNAL"),
				details=str(exc),
				exc=exc,
			)
		response.headers[REQUEST_ID_HEADER] = request_id
		return response
