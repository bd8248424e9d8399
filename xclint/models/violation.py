"""
Violation Model
===============
Pydantic model for one OCLint finding.
This is the contract between the linter runner and every downstream consumer.

Fields (wire name in parentheses, as emitted by `oclint --report-type json`):
    path            - file path as reported by the linter, often absolute
    start_line      - (startLine) first line of the offending range, >= 1
    end_line        - (endLine)
    start_column    - (startColumn)
    end_column      - (endColumn)
    priority        - 1 (most severe) to 3
    rule            - rule identifier, e.g. "long line"
    message         - human readable description, may be empty
    category        - rule category, kept only to round-trip the JSON report

Records are frozen: they are built once while parsing and never mutated.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ViolationRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str
    start_line: int = Field(alias="startLine", ge=1)
    end_line: int = Field(alias="endLine", ge=1)
    start_column: int = Field(alias="startColumn", ge=1)
    end_column: int = Field(alias="endColumn", ge=1)
    priority: int = Field(ge=1, le=3)
    rule: str
    message: str = ""
    category: Optional[str] = None

    def to_wire(self) -> dict[str, Any]:
        """Serialise back to the linter's camelCase field names."""
        return self.model_dump(by_alias=True, exclude_none=True)
