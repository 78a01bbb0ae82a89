from __future__ import annotations

from dataclasses import dataclass
from typing import List

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str
    severity: str = ERROR

    @property
    def is_error(self) -> bool:
        return self.severity == ERROR

    def __str__(self) -> str:
        return f"[{self.severity}] {self.code}: {self.message}"


class ValidationError(Exception):
    """Raised with every issue found, not just the first one."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        super().__init__("\n".join(str(i) for i in issues))

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.is_error]
