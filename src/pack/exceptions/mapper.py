"""
Translate SQLAlchemy failures into app-level RepositoryError.

Repositories wrap their writes in `db_error_handler`, which rolls the session back
and raises a sanitized RepositoryError. The raw database message is only ever
logged (at DEBUG), never put into the exception message.
"""
import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .base import RepositoryError

logger = logging.getLogger(__name__)

# https://www.postgresql.org/docs/current/errcodes-appendix.html
_PG_NOT_NULL_VIOLATION = "23502"
_PG_FOREIGN_KEY_VIOLATION = "23503"
_PG_UNIQUE_VIOLATION = "23505"


def classify_integrity_error(exc: IntegrityError) -> str:
    """
    Return one of "not_null", "foreign_key", "unique" or "unknown".

    Postgres drivers expose a SQLSTATE (`sqlstate` on psycopg 3, `pgcode` on psycopg2);
    SQLite only offers the message text.
    """
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == _PG_NOT_NULL_VIOLATION:
        return "not_null"
    if code == _PG_FOREIGN_KEY_VIOLATION:
        return "foreign_key"
    if code == _PG_UNIQUE_VIOLATION:
        return "unique"

    msg = (str(orig) if orig is not None else str(exc)).lower()
    if "not null" in msg:
        return "not_null"
    if "foreign key" in msg:
        return "foreign_key"
    if "unique" in msg or "duplicate" in msg:
        return "unique"
    return "unknown"


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of column names from the DB message (Postgres, SQLite).
    """
    msg = str(exc.orig) if exc.orig is not None else str(exc)

    # Postgres: null value in column "title"
    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    # Postgres: Key (resource_id, role)=(...)
    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    # SQLite: NOT NULL constraint failed: resources.title
    m = re.search(r'(?:NOT NULL|UNIQUE) constraint failed: (?P<cols>.+)$', msg, flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]

    return None


def map_integrity_error(exc: IntegrityError, model_name: str | None = None) -> RepositoryError:
    """
    Build the RepositoryError for an IntegrityError, with column names as details when known.
    """
    kind = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"

    logger.info(
        "mapper.integrity_error",
        extra={"model": model_part, "kind": kind, "fields": columns},
    )
    logger.debug("mapper.integrity_raw", extra={"model": model_part, "raw": str(exc.orig)})

    if kind == "not_null":
        message = f"Missing required field(s) for {model_part}"
    elif kind == "foreign_key":
        message = f"{model_part} references a record that does not exist"
    elif kind == "unique":
        message = f"{model_part} already exists"
    else:
        message = f"{model_part} database integrity error."

    return RepositoryError(message, details=columns)


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            ... DB ops that may raise ...
    This will rollback on error and raise a mapped app-level exception.
    """
    try:
        yield
    except IntegrityError as exc:
        try:
            await db.rollback()
        except Exception:
            logger.exception("Failed to rollback session after IntegrityError", extra={"model": model_name})
        raise map_integrity_error(exc, model_name) from exc
    except SQLAlchemyError as exc:
        try:
            await db.rollback()
        except Exception:
            logger.exception("Failed to rollback session after unexpected error", extra={"model": model_name})

        # Unexpected database errors are logged with stack trace for diagnostics.
        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc
