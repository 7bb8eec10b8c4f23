import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import FileResponse, HTMLResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from riddle_gate.core.config import settings
from riddle_gate.core.rate_limit import enforce_rate_limit
from riddle_gate.services.artifact import serve_artifact
from riddle_gate.services.pages import render_challenge, render_result
from riddle_gate.services.puzzle import check_answer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Puzzle"])


@router.get("/", response_class=HTMLResponse)
async def challenge_page() -> HTMLResponse:
    """Serve the riddle and its answer form."""
    return HTMLResponse(render_challenge())


async def _read_answer(request: Request) -> Any:
    """Return the raw ``answer`` form value, or None when the body is unusable.

    The value is passed through untyped (it may be an uploaded file) so the
    answer check, not request validation, decides what it means.
    """
    try:
        async with request.form() as form:
            return form.get("answer")
    except StarletteHTTPException:
        logger.info("puzzle.unreadable_form")
        return None


@router.post(
    "/check",
    response_class=HTMLResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def check(request: Request) -> HTMLResponse:
    """Evaluate a submitted answer.

    A missing, non-text or unparseable field is an incorrect answer, never a
    validation error.

    Returns:
        HTMLResponse: the reward page or an invitation to retry.
    """
    answer = await _read_answer(request)
    is_correct = check_answer(answer)
    logger.info(
        "puzzle.answer_checked",
        extra={"correct": is_correct, "answer_present": bool(answer)},
    )
    return HTMLResponse(render_result(is_correct))


@router.get("/audio.wav", response_class=FileResponse)
async def audio() -> FileResponse:
    """Stream the reward audio file (404 when missing)."""
    return serve_artifact(settings.app.artifact_path)


@router.get("/favicon.ico", include_in_schema=False)
async def favicon() -> Response:
    return Response(status_code=204)
