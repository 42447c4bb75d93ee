from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class MovieInput(BaseModel):
    title: Optional[str] = Field(default=None, max_length=255)
    director: Optional[str] = Field(default=None, max_length=255)
    genre: Optional[str] = Field(default=None, max_length=100)
    release_year: Optional[int] = None
    rating: Optional[float] = Field(default=None, ge=0, le=10)

    @field_validator("rating")
    @classmethod
    def _one_decimal_place(cls, value: Optional[float]) -> Optional[float]:
        # stored as DECIMAL(3,1)
        if value is not None and round(value, 1) != value:
            raise ValueError("rating allows at most one decimal place")
        return value

    def missing_fields(self) -> List[str]:
        return [name for name, value in self.model_dump().items() if _is_blank(value)]


class MovieRecord(BaseModel):
    id: int
    title: str
    director: str
    genre: str
    release_year: int
    rating: float


class MovieListResponse(BaseModel):
    success: bool = True
    data: List[MovieRecord]
    count: int


class MovieResponse(BaseModel):
    success: bool = True
    message: str
    data: MovieRecord


class MessageResponse(BaseModel):
    success: bool
    message: str


class ErrorResponse(MessageResponse):
    success: bool = False
    errors: Optional[List[Dict[str, Any]]] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    database: str
    environment: str


class UserRecord(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    profilePic: Optional[str] = None
    created_at: Optional[Union[datetime, str]] = None


class UserListResponse(BaseModel):
    success: bool = True
    data: List[UserRecord]
    count: int


class UserResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: UserRecord
