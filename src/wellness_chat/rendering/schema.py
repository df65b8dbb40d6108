"""Pydantic model for a validated markdown table.

A TableBlock is produced by tables.scan_lines once a run of pipe-delimited
lines has passed the header + separator + data-row check.  Cell strings are
raw (unescaped) text; escaping happens when the block is rendered to HTML.
"""

from pydantic import BaseModel, model_validator


class TableBlock(BaseModel):
    """A markdown table lifted out of a chat reply.

    ``start`` and ``end`` are the inclusive line indices of the run in the
    source text, kept for logging.  Data rows that produced no cells are
    dropped by the scanner before the model is built, so every row here has
    at least one cell.  Rows are not required to match the header width;
    model output is often ragged and is rendered as-is.
    """

    header: list[str]
    rows: list[list[str]]
    start: int
    end: int

    @model_validator(mode="after")
    def validate_rows(self) -> "TableBlock":
        """Ensure no data row is empty and the line span covers header, separator and one row."""
        for i, row in enumerate(self.rows):
            if not row:
                raise ValueError(f"Row {i} has no cells")
        if self.end - self.start < 2:
            raise ValueError(f"Table spans lines {self.start}-{self.end}, expected at least 3 lines")
        return self
