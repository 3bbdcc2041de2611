"""Request and response bodies for the JSON API.

Every body is an explicit model: keys we don't know about are dropped on the way in, and only the declared fields
are ever serialised on the way out. The public client view uses `PublicGrantResponse`, which has no `notes` field
at all.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from grant_tracker.types import DEFAULT_GRANT_STATUS, DEFAULT_MATCH_PCT, DEFAULT_PRESENTER


class _RequestModel(BaseModel):
    # amounts and phone numbers often arrive as JSON numbers; they are stored as text
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class ClientRequest(_RequestModel):
    name: str
    contact: str = ""
    sector: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""
    presenter: str = DEFAULT_PRESENTER

    @field_validator("contact", "sector", "email", "phone", "message", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("presenter", mode="before")
    @classmethod
    def _default_presenter(cls, value: Any) -> Any:
        return value or DEFAULT_PRESENTER


class GrantRequest(_RequestModel):
    name: str = ""
    org: str = ""
    cat: str = ""
    amount: str = ""
    cover: str = ""
    deadline: str = ""
    status: str = DEFAULT_GRANT_STATUS
    match_pct: int = DEFAULT_MATCH_PCT
    notes: str = ""

    @field_validator("name", "org", "cat", "amount", "cover", "deadline", "notes", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        return value or DEFAULT_GRANT_STATUS

    @field_validator("match_pct", mode="before")
    @classmethod
    def _default_match_pct(cls, value: Any) -> Any:
        return value or DEFAULT_MATCH_PCT


class ReplaceGrantsRequest(_RequestModel):
    grants: list[GrantRequest]


class PublicGrantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: str
    name: str
    org: str
    cat: str
    amount: str
    cover: str
    deadline: str
    status: str
    match_pct: int
    sort_order: int


class GrantResponse(PublicGrantResponse):
    notes: str


class _ClientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    contact: str
    sector: str
    email: str
    phone: str
    message: str
    presenter: str
    created_at: datetime
    updated_at: datetime


class ClientResponse(_ClientResponse):
    grants: list[GrantResponse]


class PublicClientResponse(_ClientResponse):
    grants: list[PublicGrantResponse]


class CreatedClientResponse(BaseModel):
    id: str
    name: str


class CreatedGrantResponse(BaseModel):
    id: str


class OkResponse(BaseModel):
    ok: bool = True
