from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# --- User ---

class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class UserUpdate(BaseModel):
    name: str | None = Field(None, max_length=255)


# --- Post ---

class PostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field("", max_length=255)
    tags_id: int | None = None


class PostUpdate(BaseModel):
    title: str | None = Field(None, max_length=255)
    content: str | None = Field(None, max_length=255)


# --- Tag ---

class TagCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class TagUpdate(BaseModel):
    name: str | None = Field(None, max_length=255)


# --- Comment ---

class CommentCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1, max_length=255)


class CommentUpdate(BaseModel):
    name: str | None = Field(None, max_length=255)
    body: str | None = Field(None, max_length=255)


# --- Envelope ---

class EnvelopeStatus(BaseModel):
    message: str
    error_code: int = Field(0, alias="errorCode")
    model_config = ConfigDict(populate_by_name=True)


class EnvelopeHeader(BaseModel):
    total_data: int = Field(alias="totalData")
    process_time_seconds: float = Field(alias="processTimeSeconds")
    model_config = ConfigDict(populate_by_name=True)


class Envelope(BaseModel):
    data: Any = None
    status: EnvelopeStatus
    header: EnvelopeHeader


class ErrorItem(BaseModel):
    code: str
    title: str
    detail: str


class ErrorResponse(BaseModel):
    errors: list[ErrorItem]
