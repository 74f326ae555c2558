"""
Shared Pydantic v2 schemas reused across multiple modules.

Provides the pagination parameters shared by the list endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PaginationParams(BaseModel):
    """Pagination parameters for list endpoints.

    Attributes:
        page: 1-based page number.
        page_size: Number of rows per page (capped at 200 to protect DB).
    """

    page: int = Field(
        default=1,
        ge=1,
        description="Número de página (base 1).",
    )
    page_size: int = Field(
        default=20,
        ge=1,
        le=200,
        description="Registros por página (máximo 200).",
    )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

