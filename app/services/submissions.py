from pydantic import ValidationError

from app.core.errors import EntryValidationError, MalformedInputError
from app.repositories.grade_entries import GradeEntryRepository
from app.schemas.grade_entry import GradeEntrySubmission, SubmitResponse
from app.services.validation import ValidationService


def submit_entry(
    payload,
    validator: ValidationService,
    repository: GradeEntryRepository,
) -> SubmitResponse:
    errors = validator.validate(payload)
    if errors:
        raise EntryValidationError(errors)

    try:
        submission = GradeEntrySubmission.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first["loc"])
        raise MalformedInputError(f"Invalid value for {field}: {first['msg']}") from exc

    result = repository.upsert(submission.to_entry())
    return SubmitResponse(**result.model_dump())
