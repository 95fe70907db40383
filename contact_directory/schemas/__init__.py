# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic response schemas — every endpoint answers with ApiResponse."""
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import to_jsonable_python
from fastapi.responses import JSONResponse

T = TypeVar("T")


class EmployeeOut(BaseModel):
    name: str
    email: str
    tel: str
    joined: str


class PaginatedEmployees(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: List[EmployeeOut]
    page: int
    page_size: int = Field(alias="pageSize")
    total_count: int = Field(alias="totalCount")
    total_pages: int = Field(alias="totalPages")


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    message: Optional[str] = None
    code: int
    data: Optional[T] = None

    @classmethod
    def ok(cls, data: Any, code: int = 200) -> "ApiResponse":
        return cls(success=True, message=None, code=code, data=to_jsonable_python(data, by_alias=True))

    @classmethod
    def fail(cls, message: str, code: int = 400, data: Any = None) -> "ApiResponse":
        return cls(success=False, message=message, code=code, data=to_jsonable_python(data, by_alias=True))

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.code,
            content=self.model_dump(mode="json", by_alias=True),
        )
