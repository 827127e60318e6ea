"""
Pydantic schemas for gridpath settings.

Design Philosophy:
- One validated settings object per visualization session
- Defaults match the classic 20x30 board with corner start/end
- Validation errors surface as ``InvalidConfigurationError`` through
  ``GridConfig.build`` so callers only ever catch library exceptions
"""

from typing import Any, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, model_validator

from .environment.grid import DEFAULT_COLS, DEFAULT_ROWS
from .animation import DEFAULT_PATH_INTERVAL_MS, DEFAULT_VISIT_INTERVAL_MS
from .errors import InvalidConfigurationError


class GridConfig(BaseModel):
    """Settings for one session: grid shape, endpoints and replay pacing."""

    model_config = {"frozen": True}

    rows: int = Field(DEFAULT_ROWS, gt=0, description="Number of grid rows")
    cols: int = Field(DEFAULT_COLS, gt=0, description="Number of grid columns")
    start: Tuple[int, int] = Field((0, 0), description="Start cell as (row, col)")
    # None means "bottom-right corner"; resolved by the validator below.
    end: Optional[Tuple[int, int]] = Field(None, description="End cell as (row, col)")
    visit_interval_ms: int = Field(
        DEFAULT_VISIT_INTERVAL_MS, ge=0, description="Delay between visited-cell events"
    )
    path_interval_ms: int = Field(
        DEFAULT_PATH_INTERVAL_MS, ge=0, description="Delay between path-cell events"
    )

    @model_validator(mode="before")
    @classmethod
    def _default_end(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("end") is None:
            rows = data.get("rows", DEFAULT_ROWS)
            cols = data.get("cols", DEFAULT_COLS)
            # Field validation has not run yet; accept whatever it would coerce.
            try:
                rows, cols = int(rows), int(cols)
            except (TypeError, ValueError):
                return data  # the rows/cols field errors will report this
            data = {**data, "end": (rows - 1, cols - 1)}
        return data

    @model_validator(mode="after")
    def _endpoints_in_bounds(self) -> "GridConfig":
        if self.end is None:
            raise ValueError("end could not be derived from rows and cols")
        for name, (row, col) in (("start", self.start), ("end", self.end)):
            if not (0 <= row < self.rows and 0 <= col < self.cols):
                raise ValueError(
                    f"{name} ({row}, {col}) is outside the {self.rows}x{self.cols} grid"
                )
        return self

    @classmethod
    def build(cls, **values: Any) -> "GridConfig":
        """Validate ``values``, raising ``InvalidConfigurationError`` on failure."""
        try:
            return cls(**values)
        except ValidationError as exc:
            errors = exc.errors()
            first = errors[0] if errors else {}
            loc = ".".join(str(part) for part in first.get("loc", ())) or None
            raise InvalidConfigurationError(first.get("msg", str(exc)), field=loc) from exc
