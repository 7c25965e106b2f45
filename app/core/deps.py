from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.db.session import SessionLocal
from app.repositories.grade_entries import GradeEntryRepository
from app.services.mapper import RecordMapper
from app.services.validation import ValidationService
from app.store.sql import SqlTabularStore


# every request that needs DB will get a fresh session, and it will always close.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_repository(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> GradeEntryRepository:
    schema = settings.table_schema()
    return GradeEntryRepository(SqlTabularStore(db, schema), RecordMapper(schema))


def get_validator(settings: Settings = Depends(get_settings)) -> ValidationService:
    return ValidationService(settings.LEARNING_SKILLS, settings.COMMENT_MAX_LENGTH)
