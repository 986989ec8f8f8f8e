from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    JAVA = "java"
    CPP = "cpp"
    CSHARP = "csharp"
    GO = "go"

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self]

    @property
    def fence(self) -> str:
        """Info string used to open the markdown code block."""

        return self.value

    @property
    def test_framework(self) -> str:
        return TEST_FRAMEWORKS[self]

    @classmethod
    def parse(cls, value: "Language | str") -> "Language":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        try:
            return cls(key)
        except ValueError:
            supported = ", ".join(item.value for item in cls)
            raise ValueError(f"unsupported language: {value!r} (expected one of {supported})") from None


DEFAULT_LANGUAGE = Language.JAVASCRIPT

DISPLAY_NAMES: dict[Language, str] = {
    Language.JAVASCRIPT: "JavaScript",
    Language.PYTHON: "Python",
    Language.JAVA: "Java",
    Language.CPP: "C++",
    Language.CSHARP: "C#",
    Language.GO: "Go",
}

TEST_FRAMEWORKS: dict[Language, str] = {
    Language.JAVASCRIPT: "Jest",
    Language.PYTHON: "pytest",
    Language.JAVA: "JUnit 5",
    Language.CPP: "GoogleTest",
    Language.CSHARP: "xUnit",
    Language.GO: "the standard testing package (go test)",
}


def describe_languages() -> list[dict[str, str]]:
    """Return the language table in the order offered by the language picker."""

    return [
        {
            "id": language.value,
            "label": language.display_name,
            "test_framework": language.test_framework,
        }
        for language in Language
    ]


__all__ = ["DEFAULT_LANGUAGE", "Language", "describe_languages"]
