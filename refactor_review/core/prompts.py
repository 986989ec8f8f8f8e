"""Prompt templates for the three code transformations.

Source text is embedded verbatim inside a fenced block. It is not escaped, so
code that itself contains a ```` ``` ```` line will close the fence early;
the model usually copes and the text is never altered on its way out.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .languages import Language


class OperationKind(str, Enum):
    REVIEW = "review"
    REFACTOR = "refactor"
    GENERATE_TESTS = "generate-tests"


_REVIEW_TEMPLATE = (
    "You are an experienced senior software engineer. Review the following code written in "
    "{language} and point out concrete improvements. Mention what is done well too, and explain "
    "everything so that a beginner can follow it. Write your answer in Markdown."
)

_REFACTOR_TEMPLATE = "As a senior engineer, refactor the following code written in {language}."

_TESTS_TEMPLATE = (
    "As a senior engineer, write a unit-test suite for the following code written in {language}. "
    "Use {framework}, cover normal cases, edge cases and error handling, and answer with the "
    "test code only."
)

_TEMPLATES: dict[OperationKind, str] = {
    OperationKind.REVIEW: _REVIEW_TEMPLATE,
    OperationKind.REFACTOR: _REFACTOR_TEMPLATE,
    OperationKind.GENERATE_TESTS: _TESTS_TEMPLATE,
}


@dataclass(frozen=True, slots=True)
class PromptRequest:
    operation: OperationKind
    language: Language
    source_text: str

    def render(self) -> str:
        instruction = _TEMPLATES[self.operation].format(
            language=self.language.display_name,
            framework=self.language.test_framework,
        )
        return f"{instruction}\n\nCode:\n```{self.language.fence}\n{self.source_text}\n```"


def build_prompt(operation: OperationKind | str, language: Language | str, source_text: str) -> str:
    """Render the instruction sent to the model for ``operation``."""

    request = PromptRequest(
        operation=OperationKind(operation),
        language=Language.parse(language),
        source_text=source_text,
    )
    return request.render()


__all__ = ["OperationKind", "PromptRequest", "build_prompt"]
