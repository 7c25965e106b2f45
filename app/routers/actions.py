"""
Apps Script style endpoint: a single URL dispatched on ?action=, with optional
JSONP wrapping for cross-origin pages that load it through a <script> tag.

Unlike the REST routes, this surface always answers 200 and reports failures
inside the envelope.
"""

import json
import logging
import re
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse

from app.core.deps import get_repository, get_validator
from app.core.errors import GradebookError, MalformedInputError, failure_envelope
from app.repositories.grade_entries import GradeEntryRepository
from app.schemas.grade_entry import EntriesResponse
from app.services.submissions import submit_entry
from app.services.validation import ValidationService

logger = logging.getLogger(__name__)

router = APIRouter()

AVAILABLE_ACTIONS = ("getAll", "getByTeacher", "getByStudent", "summary", "export")

_CALLBACK_NAME = re.compile(r"^[A-Za-z_$][\w$.]*$")


def _render(result: dict, callback: Optional[str]) -> Response:
    if callback is None:
        return JSONResponse(content=result)

    if not _CALLBACK_NAME.fullmatch(callback):
        return JSONResponse(content=failure_envelope(MalformedInputError("Invalid callback name")))

    body = f"{callback}({json.dumps(result, allow_nan=False)})"
    return Response(content=body, media_type="application/javascript")


def _run_action(
    action: Optional[str],
    teacher: Optional[str],
    student: Optional[str],
    repo: GradeEntryRepository,
) -> dict:
    if action == "getAll":
        return EntriesResponse(entries=repo.list_all()).model_dump()
    if action == "getByTeacher":
        return EntriesResponse(entries=repo.filter_by_teacher(teacher or "")).model_dump()
    if action == "getByStudent":
        return EntriesResponse(entries=repo.filter_by_student(student or "")).model_dump()
    if action == "summary":
        return repo.summarize().model_dump(by_alias=True)

    return {"message": f"Report Card API is running. Available actions: {', '.join(AVAILABLE_ACTIONS)}"}


@router.get("")
def dispatch(
    action: Optional[str] = None,
    teacher: Optional[str] = None,
    student: Optional[str] = None,
    callback: Optional[str] = None,
    repo: GradeEntryRepository = Depends(get_repository),
):
    try:
        if action == "export" and callback is None:
            return PlainTextResponse(repo.export_delimited(), media_type="text/csv")
        if action == "export":
            result = {"success": True, "csv": repo.export_delimited()}
        else:
            result = _run_action(action, teacher, student, repo)
        return _render(jsonable_encoder(result), callback)
    except GradebookError as exc:
        logger.warning("action=%s failed: %s", action, exc.message)
        return _render(failure_envelope(exc), callback)
    except Exception as exc:
        logger.exception("action=%s failed", action)
        return _render(failure_envelope(exc), callback)


def _decode(raw: bytes) -> Any:
    try:
        return json.loads(raw or b"null")
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedInputError(f"Invalid JSON payload: {exc}") from exc


# The body is parsed by hand: browsers posting cross-origin without a
# preflight send JSON as text/plain.
@router.post("")
async def dispatch_write(
    request: Request,
    validator: ValidationService = Depends(get_validator),
    repo: GradeEntryRepository = Depends(get_repository),
):
    try:
        payload = _decode(await request.body())
        result = submit_entry(payload, validator, repo).model_dump()
        return JSONResponse(content=result)
    except GradebookError as exc:
        return JSONResponse(content=failure_envelope(exc))
    except Exception as exc:
        logger.exception("write failed")
        return JSONResponse(content=failure_envelope(exc))
