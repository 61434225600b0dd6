# app/data/transaction.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.errors import CommerceError, ConflictError, TransientStoreError
from app.utils.logging import get_logger

logger = get_logger(__name__)

# lock_not_available, serialization_failure, deadlock_detected
_PG_CONFLICT_CODES = {"55P03", "40001", "40P01"}


def _is_lock_conflict(exc: OperationalError) -> bool:
    pgcode = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
    if pgcode in _PG_CONFLICT_CODES:
        return True
    return "database is locked" in str(exc.orig)


def translate_db_error(exc: SQLAlchemyError) -> CommerceError:
    if isinstance(exc, IntegrityError):
        return ConflictError("Naruszenie ograniczenia bazy, sprobuj ponownie")
    if isinstance(exc, OperationalError) and _is_lock_conflict(exc):
        return ConflictError("Zasob jest zablokowany przez inna operacje, sprobuj ponownie")
    return TransientStoreError()


@contextmanager
def unit_of_work(db: Session, lock_timeout_ms: int | None = None) -> Iterator[Session]:
    """
    Jedna transakcja: commit przy sukcesie, rollback na kazdej sciezce bledu.

    Blokady wierszy (FOR UPDATE) wziete w srodku zwalniaja sie na commit/rollback.
    Bledy SQLAlchemy wychodza jako ConflictError / TransientStoreError.
    """
    try:
        if lock_timeout_ms and db.get_bind().dialect.name == "postgresql":
            db.execute(text(f"SET LOCAL lock_timeout = {int(lock_timeout_ms)}"))
        yield db
        db.commit()
    except CommerceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        error = translate_db_error(e)
        logger.warning(f"Transakcja wycofana ({error.code}): {type(e).__name__}")
        raise error from e
    except Exception:
        db.rollback()
        raise
