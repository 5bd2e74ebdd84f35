"""
Pydantic models for Contact Watchman.

Shared data models for parsed contacts and rejected rows.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


# =====================================================
# Accepted Records
# =====================================================

class Contact(BaseModel):
    """Validated contact record."""
    model_config = ConfigDict(frozen=True)

    id: int
    first: str
    middle: str = ""  # optional
    last: str
    phone: str

    def as_json_ready(self) -> Dict[str, Any]:
        """Return the output artifact payload, omitting an empty middle name."""
        exclude = {"middle"} if not self.middle else None
        return self.model_dump(exclude=exclude)


# =====================================================
# Rejected Rows
# =====================================================

class RowError(BaseModel):
    """A rejected CSV record paired with its validation messages."""
    model_config = ConfigDict(frozen=True)

    line: int  # record number in the source file, header is 1
    fields: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    def as_json_ready(self) -> Dict[str, Any]:
        """Return the error artifact payload."""
        return self.model_dump()
