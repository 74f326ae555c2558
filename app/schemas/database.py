"""
Pydantic v2 schemas for the administrative SQL console.

The response envelope keeps the ``success`` / ``data`` / ``rowCount`` keys
the frontend console already reads.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SqlExecuteRequest(BaseModel):
    """A single SQL statement to run against the application database."""

    sql: str = Field(..., min_length=1, max_length=20000)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"sql": "SELECT codigo, nombre, tarifa FROM concepto_retencion"}
        }
    )


class SqlExecuteResponse(BaseModel):
    """Result of a successful statement.

    Attributes:
        success: Always ``True`` for this model.
        data: Returned rows as dicts (empty for DML/DDL).
        rowCount: Rows returned, or rows affected for DML.
        columns: Column names of the result set.
        truncated: Whether ``data`` was cut at the configured row limit.
    """

    success: bool = True
    data: list[dict[str, Any]] = Field(default_factory=list)
    rowCount: int = 0
    columns: list[str] = Field(default_factory=list)
    truncated: bool = False
