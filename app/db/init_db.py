from app.core.config import get_settings
from app.db.session import SessionLocal
from app.store.sql import SqlTabularStore


def init_db() -> None:
    db = SessionLocal()
    try:
        SqlTabularStore(db, get_settings().table_schema()).ensure_initialized()
    finally:
        db.close()
