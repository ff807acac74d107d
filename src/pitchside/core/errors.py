from __future__ import annotations

from pitchside.contracts import ValidationIssue


class LineupStateError(ValueError):
    def __init__(self, code: str, entity_id: str, message: str) -> None:
        super().__init__(f"{code}:{entity_id}:{message}")
        self.code = code
        self.entity_id = entity_id


def blocking_issue(code: str, field_path: str, entity_id: str, message: str) -> ValidationIssue:
    return ValidationIssue(
        code=code,
        severity="blocking",
        field_path=field_path,
        entity_id=entity_id,
        message=message,
    )
