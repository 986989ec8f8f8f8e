from __future__ import annotations

from fastapi import APIRouter, HTTPException

from refactor_review.application import get_orchestrator
from refactor_review.core.languages import describe_languages

router = APIRouter(tags=["session"])


@router.get("/languages")
async def list_languages() -> dict:
    return {"items": describe_languages()}


@router.get("/session")
async def get_session() -> dict:
    return get_orchestrator().snapshot()


@router.put("/session/code")
async def update_code(payload: dict) -> dict:
    code = payload.get("code")
    if not isinstance(code, str):
        raise HTTPException(status_code=400, detail="code must be a string")
    orchestrator = get_orchestrator()
    orchestrator.on_code_changed(code)
    return orchestrator.snapshot()


@router.put("/session/language")
async def update_language(payload: dict) -> dict:
    language = payload.get("language")
    if not language:
        raise HTTPException(status_code=400, detail="language is required")
    orchestrator = get_orchestrator()
    try:
        orchestrator.on_language_changed(str(language))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return orchestrator.snapshot()


@router.post("/session/review")
async def request_review_refactor() -> dict:
    """Run the review and refactor calls and return the settled state."""
    orchestrator = get_orchestrator()
    accepted = await orchestrator.request_review_refactor()
    return {"accepted": accepted, "state": orchestrator.snapshot()}


@router.post("/session/tests")
async def request_test_generation() -> dict:
    orchestrator = get_orchestrator()
    accepted = await orchestrator.request_test_generation()
    return {"accepted": accepted, "state": orchestrator.snapshot()}
