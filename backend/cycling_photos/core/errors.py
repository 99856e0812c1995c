"""Application-wide error type.

Domain and service code raise ``AppError`` through its factory methods
instead of ``HTTPException`` so the HTTP layer stays the only place that
knows about response envelopes.
"""

from enum import Enum
from typing import Any, Dict, List


class ErrorCode(str, Enum):
	VALIDATION_FAILED = "VALIDATION_FAILED"
	NOT_FOUND = "NOT_FOUND"
	BUSINESS_RULE = "BUSINESS_RULE"
	EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
	INTERNAL = "INTERNAL"


class AppError(Exception):
	def __init__(
		self,
		message_key: str,
		status_code: int,
		code: ErrorCode = ErrorCode.INTERNAL,
		should_throw: bool = False,
		context: Dict[str, Any] | None = None,
		fields: Dict[str, List[str]] | None = None,
	) -> None:
		super().__init__(message_key)
		self.message_key = message_key
		self.status_code = status_code
		self.code = code
		self.should_throw = should_throw
		self.context = context
		self.fields = fields

	@classmethod
	def not_found(cls, entity: str, entity_id: Any) -> "AppError":
		return cls(
			"errors.NOT_FOUND",
			404,
			ErrorCode.NOT_FOUND,
			context={"entity": entity, "id": str(entity_id)},
		)

	@classmethod
	def validation_failed(cls, fields: Dict[str, List[str]]) -> "AppError":
		return cls("errors.VALIDATION_FAILED", 400, ErrorCode.VALIDATION_FAILED, fields=fields)

	@classmethod
	def business_rule(cls, message_key: str, should_throw: bool = False) -> "AppError":
		"""Domain invariant violation; ``message_key`` is stable and safe to branch on."""
		return cls(message_key, 422, ErrorCode.BUSINESS_RULE, should_throw=should_throw)

	@classmethod
	def external_service(cls, service: str, original: BaseException | None = None) -> "AppError":
		return cls(
			"errors.EXTERNAL_SERVICE",
			502,
			ErrorCode.EXTERNAL_SERVICE,
			context={"service": service, "originalError": str(original) if original else None},
		)

	@classmethod
	def internal(cls, message: str, context: Dict[str, Any] | None = None) -> "AppError":
		return cls(message, 500, ErrorCode.INTERNAL, context=context)
