"""Pydantic schemas for grid snapshots.

These models mirror the frozen dataclasses in ``grid.py`` but keep grid
snapshots serializable for logging, fixtures and command-line input.
"""

from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, Field


class GridState(BaseModel):
    """Plain-data representation of a ``Grid``."""

    rows: int = Field(..., description="Number of rows (R)")
    cols: int = Field(..., description="Number of columns (C)")
    start: Tuple[int, int] = Field(..., description="Start cell as (row, col)")
    end: Tuple[int, int] = Field(..., description="End cell as (row, col)")
    walls: List[Tuple[int, int]] = Field(
        default_factory=list,
        description="Wall cells as (row, col), sorted row-major",
    )
