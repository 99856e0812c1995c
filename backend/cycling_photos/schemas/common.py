from dataclasses import dataclass
from typing import Any, Dict, Generic, List, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EntityId(CamelModel):
	id: UUID


@dataclass(frozen=True)
class Pagination:
	page: int = 1
	limit: int = 20

	@property
	def skip(self) -> int:
		return (self.page - 1) * self.limit

	@property
	def take(self) -> int:
		return self.limit


class ResponseMeta(CamelModel):
	request_id: str
	timestamp: str
	message: str | None = None


class ApiResponse(CamelModel, Generic[T]):
	data: T
	meta: ResponseMeta


class ErrorDetail(CamelModel):
	code: str
	message: str
	should_throw: bool = False
	fields: Dict[str, List[str]] | None = None
	details: Any = None
	stack: str | None = None


class ErrorMeta(CamelModel):
	request_id: str
	timestamp: str
	path: str


class ApiErrorResponse(CamelModel):
	error: ErrorDetail
	meta: ErrorMeta
