"""
Administrative SQL console: service layer.

Runs one raw statement in its own transaction.  Row-returning statements
are read up to ``SQL_MAX_ROWS``; anything else is committed and reports the
affected row count.  Database errors are rolled back and surfaced as
``SqlConsoleError`` so the router can answer with the console's error
envelope instead of FastAPI's ``detail`` wrapper.
"""

from __future__ import annotations

import datetime
import logging
from decimal import Decimal
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.schemas.database import SqlExecuteResponse

logger = logging.getLogger(__name__)


class SqlConsoleError(Exception):
    """A statement failed in the database."""

    def __init__(self, error: str, code: str | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "error": self.error, "code": self.code}


def _json_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime.date, datetime.datetime, datetime.time)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.hex()
    return value


def execute_sql(db: Session, sql: str) -> SqlExecuteResponse:
    """Execute *sql* and return rows or the affected count.

    Raises:
        HTTPException 403: Console disabled by configuration.
        SqlConsoleError: The database rejected the statement.
    """
    settings = get_settings()
    if not settings.SQL_CONSOLE_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="La consola SQL está deshabilitada (SQL_CONSOLE_ENABLED=false).",
        )

    statement = sql.strip().rstrip(";")
    logger.info("SQL console: %s", statement[:200])

    try:
        # Raw driver execution: ":name" inside literals is not a bind parameter
        result = db.connection().exec_driver_sql(
            statement, execution_options={"no_parameters": True}
        )
        if result.returns_rows:
            columns = list(result.keys())
            rows = result.fetchmany(settings.SQL_MAX_ROWS + 1)
            truncated = len(rows) > settings.SQL_MAX_ROWS
            rows = rows[: settings.SQL_MAX_ROWS]
            data = [
                {col: _json_value(val) for col, val in zip(columns, row)}
                for row in rows
            ]
            db.rollback()
            return SqlExecuteResponse(
                data=data, rowCount=len(data), columns=columns, truncated=truncated
            )

        affected = result.rowcount if result.rowcount is not None and result.rowcount >= 0 else 0
        db.commit()
        return SqlExecuteResponse(data=[], rowCount=affected)
    except SQLAlchemyError as exc:
        db.rollback()
        orig = getattr(exc, "orig", None)
        code = getattr(orig, "pgcode", None) or getattr(exc, "code", None)
        message = str(orig) if orig is not None else str(exc)
        logger.warning("SQL console error: %s", message)
        raise SqlConsoleError(message, code) from exc
