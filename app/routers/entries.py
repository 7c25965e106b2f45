from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import PlainTextResponse

from app.core.deps import get_repository, get_validator
from app.repositories.grade_entries import GradeEntryRepository
from app.schemas.grade_entry import EntriesResponse, SubmitResponse
from app.schemas.summary import SummaryReport
from app.services.submissions import submit_entry
from app.services.validation import ValidationService

router = APIRouter()


@router.post(
    "",
    response_model=SubmitResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"description": "Existing entry for this student and course was replaced"},
        400: {"description": "Validation failed or malformed payload"},
    },
)
def submit(
    response: Response,
    payload: dict[str, Any] = Body(...),
    validator: ValidationService = Depends(get_validator),
    repo: GradeEntryRepository = Depends(get_repository),
):
    result = submit_entry(payload, validator, repo)
    if result.action == "updated":
        response.status_code = status.HTTP_200_OK
    return result


@router.get("", response_model=EntriesResponse)
def list_entries(
    teacher: Optional[str] = None,
    student: Optional[str] = None,
    repo: GradeEntryRepository = Depends(get_repository),
):
    if teacher is not None:
        entries = repo.filter_by_teacher(teacher)
        if student is not None:
            entries = [e for e in entries if e.student_name == student]
    elif student is not None:
        entries = repo.filter_by_student(student)
    else:
        entries = repo.list_all()

    return EntriesResponse(entries=entries)


@router.delete("")
def clear_entries(repo: GradeEntryRepository = Depends(get_repository)):
    repo.clear_all()
    return {"success": True}


@router.get("/export", response_class=PlainTextResponse)
def export_entries(repo: GradeEntryRepository = Depends(get_repository)):
    return PlainTextResponse(
        repo.export_delimited(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="grades.csv"'},
    )


@router.get("/summary", response_model=SummaryReport)
def summary(repo: GradeEntryRepository = Depends(get_repository)):
    return repo.summarize()
