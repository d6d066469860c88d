"""Pydantic schemas for request validation and response serialization.

Payloads use camelCase on the wire; partial-update schemas forbid unknown
fields because their keys end up naming columns.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, FrozenSet, List, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel

from .models import RoleEnum


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PatchModel(CamelModel):
    """Sparse update payload.

    An explicit ``null`` clears a column, so it is only accepted for the
    fields named in ``nullable_fields``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{to_camel(name)} may not be null")
        return self

    def changes(self) -> dict:
        """Only the fields the client sent, keyed by their wire names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class Token(BaseModel):
    token: str


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=30)
    password: str = Field(..., min_length=1)


class UserRegister(CamelModel):
    username: str = Field(..., min_length=1, max_length=30)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    birth_date: Optional[date] = None


class UserUpdate(PatchModel):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"birth_date"})

    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[EmailStr] = None
    birth_date: Optional[date] = None
    is_active: Optional[bool] = None
    password: Optional[str] = None
    new_password: Optional[str] = Field(None, min_length=5, max_length=20)


class UserOut(CamelModel):
    id: int
    username: str
    first_name: str
    last_name: str
    email: str
    birth_date: Optional[date] = None
    role: RoleEnum
    is_verified: bool
    is_active: bool


class UserResponse(BaseModel):
    user: UserOut


class UsersResponse(BaseModel):
    users: List[UserOut]


class VerificationRequest(BaseModel):
    email: EmailStr


class ServiceCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    is_active: bool = True


class ServiceUpdate(PatchModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, ge=0)
    is_active: Optional[bool] = None


class ServiceOut(CamelModel):
    id: int
    title: str
    description: str
    price: Decimal
    is_active: bool


class ServiceResponse(BaseModel):
    service: ServiceOut


class ServicesResponse(BaseModel):
    services: List[ServiceOut]


class UserServiceCreate(CamelModel):
    service_id: int
    confirmed_price: Decimal = Field(..., ge=0)
    addition_info: Optional[str] = None


class UserServiceUpdate(PatchModel):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"addition_info"})

    confirmed_price: Optional[Decimal] = Field(None, ge=0)
    addition_info: Optional[str] = None


class PriceChange(BaseModel):
    price: Decimal


class UserServiceOut(CamelModel):
    id: int
    user_id: int
    service_id: int
    confirmed_price: Decimal
    is_completed: bool
    addition_info: Optional[str] = None
    confirmation_code: Optional[str] = None
    requested_date: Optional[datetime] = None
    fulfilled_date: Optional[datetime] = None


class UserServiceDetail(CamelModel):
    user_service_id: int
    user_id: int
    username: Optional[str] = None
    first_name: Optional[str] = None
    service_id: int
    title: str
    description: str
    price: Decimal
    is_active: bool
    confirmed_price: Decimal
    is_completed: bool
    addition_info: Optional[str] = None
    confirmation_code: Optional[str] = None
    requested_date: Optional[datetime] = None
    fulfilled_date: Optional[datetime] = None


class UserServiceResponse(CamelModel):
    user_service: UserServiceOut


class UserServicesResponse(CamelModel):
    user_services: List[UserServiceDetail]


class ReviewCreate(CamelModel):
    service_id: int
    review_text: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5, strict=True)


class ReviewUpdate(PatchModel):
    review_text: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5, strict=True)


class ReviewOut(CamelModel):
    id: int
    user_id: int
    service_id: int
    review_text: str
    rating: int
    time: Optional[datetime] = None


class ReviewDetail(ReviewOut):
    username: str
    first_name: str


class ReviewResponse(BaseModel):
    review: ReviewDetail


class ReviewSavedResponse(BaseModel):
    review: ReviewOut


class ReviewsResponse(BaseModel):
    reviews: List[ReviewDetail]


class Deleted(BaseModel):
    deleted: Union[int, str]
