from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Part(BaseModel):
    text: str


class Content(BaseModel):
    parts: list[Any] = Field(min_length=1)


class Candidate(BaseModel):
    content: Content


class GenerateContentResponse(BaseModel):
    """Envelope of a ``generateContent`` answer.

    Only the first candidate and its first part are read, so later
    candidates (e.g. safety-blocked ones) and non-text parts are not
    validated.
    """

    candidates: list[Any] = Field(min_length=1)

    def first_text(self) -> str:
        candidate = Candidate.model_validate(self.candidates[0])
        return Part.model_validate(candidate.content.parts[0]).text


def build_generate_request(prompt: str) -> dict:
    return {"contents": [{"parts": [{"text": prompt}]}]}
