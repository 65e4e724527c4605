import logging
from typing import Literal, Optional

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse

from .documents import apply_transformation, decode_document
from .errors import SelectionError, TransformationConfigError
from .models import (
    CommandInfo,
    CommandsResponse,
    ErrorResponse,
    HealthResponse,
    TransformRequest,
    TransformResponse,
)
from .rules import SQL_LIKE_MISSING_INPUT
from .transform import Command, TextTransformation, create_transformation

logger = logging.getLogger(__name__)

app = FastAPI(
    title="list-transformation",
    description="List transformation commands for preparing lists of strings for databases and scripts",
    version="0.2.0",
)


@app.exception_handler(TransformationConfigError)
async def transformation_config_error(request: Request, exc: TransformationConfigError):
    logger.warning("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def build_transformation(
    command: Command,
    order: str,
    column: Optional[str],
    dialect: Optional[str],
    conjunction: Optional[str],
) -> TextTransformation:
    if command is Command.LIST_TO_SQL_LIKE and not (column and column.strip() and dialect and conjunction):
        logger.warning("Rejected %s: missing SQL LIKE parameters", command.value)
        raise HTTPException(status_code=422, detail=SQL_LIKE_MISSING_INPUT)

    return create_transformation(
        command,
        order=order,
        column=column,
        dialect=dialect,
        conjunction=conjunction,
    )


def _run(command: Command, transformation: TextTransformation, text: str, start=None, end=None) -> dict:
    try:
        result = apply_transformation(text, transformation, start, end)
    except SelectionError as exc:
        logger.warning("Rejected %s: %s", command.value, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    report = result["report"]
    logger.info(
        "Applied %s: %d line(s) in, %d line(s) out",
        command.value,
        report["lines_in"],
        report["lines_out"],
    )
    return {"command": command, **result}


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.get("/commands", response_model=CommandsResponse)
def list_commands():
    return {"commands": [CommandInfo(command=command, title=command.title) for command in Command]}


@app.post(
    "/transform",
    response_model=TransformResponse,
    responses={422: {"model": ErrorResponse}},
)
def transform_text(request: TransformRequest):
    transformation = build_transformation(
        request.command,
        request.order,
        request.column,
        request.dialect,
        request.conjunction,
    )
    start = end = None
    if request.selection is not None:
        start, end = request.selection.start, request.selection.end
    return _run(request.command, transformation, request.text, start, end)


@app.post(
    "/transform/file",
    response_model=TransformResponse,
    responses={422: {"model": ErrorResponse}},
)
async def transform_file(
    file: UploadFile = File(...),
    command: Command = Form(...),
    order: Literal["ASC", "DESC"] = Form("ASC"),
    column: Optional[str] = Form(None),
    dialect: Optional[str] = Form(None),
    conjunction: Optional[Literal["AND", "OR"]] = Form(None),
):
    transformation = build_transformation(command, order, column, dialect, conjunction)

    raw = await file.read()
    text, encoding = decode_document(raw)

    response = _run(command, transformation, text)
    response["report"]["encoding"] = encoding
    return response
