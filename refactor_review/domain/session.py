"""Domain state for a code review session."""
from __future__ import annotations

from dataclasses import dataclass, replace

from refactor_review.core.languages import DEFAULT_LANGUAGE, Language
from refactor_review.core.prompts import OperationKind

DEFAULT_CODE = "// Enter your code here"

SLOT_FIELDS: dict[OperationKind, str] = {
    OperationKind.REVIEW: "review_text",
    OperationKind.REFACTOR: "refactor_text",
    OperationKind.GENERATE_TESTS: "test_text",
}


@dataclass(slots=True)
class SessionState:
    """Observable state rendered by the presentation shell."""

    code: str = DEFAULT_CODE
    language: Language = DEFAULT_LANGUAGE
    review_text: str = ""
    refactor_text: str = ""
    test_text: str = ""
    busy: bool = False

    def set_result(self, operation: OperationKind, text: str) -> None:
        setattr(self, SLOT_FIELDS[operation], text)

    def copy(self) -> "SessionState":
        return replace(self)

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "language": self.language.value,
            "reviewText": self.review_text,
            "refactorText": self.refactor_text,
            "testText": self.test_text,
            "busy": self.busy,
        }
