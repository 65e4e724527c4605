from __future__ import annotations

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from .rules import SQL_DIALECTS
from .transform import Command


class Selection(BaseModel):
    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def check_order(self) -> "Selection":
        if self.end < self.start:
            raise ValueError("selection end must not be before start")
        return self


class TransformRequest(BaseModel):
    command: Command
    text: str
    selection: Optional[Selection] = Field(default=None, examples=[None])
    order: Literal["ASC", "DESC"] = "ASC"
    # SQL LIKE parameters; required for listToSqlLike, checked by the endpoint.
    column: Optional[str] = None
    dialect: Optional[str] = Field(
        default=None,
        description="One of: " + ", ".join(SQL_DIALECTS),
        examples=["mysql"],
    )
    conjunction: Optional[Literal["AND", "OR"]] = None


class NewlineCounts(BaseModel):
    crlf: int = 0
    lf: int = 0


class EncodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False


class TransformReport(BaseModel):
    whole_document: bool = True
    lines_in: int = 0
    lines_out: int = 0
    newlines: NewlineCounts = Field(default_factory=NewlineCounts)
    encoding: Optional[EncodingReport] = None


class TransformResponse(BaseModel):
    command: Command
    text: str
    replacement: str
    range: Selection
    report: TransformReport


class CommandInfo(BaseModel):
    command: Command
    title: str


class CommandsResponse(BaseModel):
    commands: List[CommandInfo] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    detail: str


class HealthResponse(BaseModel):
    ok: bool = True
