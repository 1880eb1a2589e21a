import logging
from pathlib import Path
from typing import List, Union

from fastapi import APIRouter, Form, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

import config
from rotation.functions import build_schedule, schedule_to_dict
from rotation.models import Mode, ScheduleRequest, ScheduleResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Rotation"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


class ScheduleIn(BaseModel):
    player_names: Union[str, List[str]]
    num_matches: int = config.DEFAULT_NUM_MATCHES
    mode: Mode = Mode.ONE_COURT


# -- Helpers -------------------------------------------------------------------

def _form_context(result: ScheduleResponse) -> dict:
    req = result.request
    return {
        "title": config.APP_TITLE,
        "modes": list(Mode),
        "player_names": req.raw_names,
        "num_matches": req.num_matches,
        "mode": req.mode,
        "error": result.error,
    }


def _generate(player_names: str, num_matches: int, mode: Mode) -> ScheduleResponse:
    result = build_schedule(ScheduleRequest(
        raw_names=player_names, num_matches=num_matches, mode=mode,
    ))
    if result.ok:
        logger.info("Schedule: %d matches, %s", len(result.schedule), mode.value)
    return result


# Routes

@router.head("/")
async def index_head():
    return Response(status_code=200)


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    blank = ScheduleResponse(request=ScheduleRequest(
        raw_names="", num_matches=config.DEFAULT_NUM_MATCHES,
    ))
    return templates.TemplateResponse(request, "rotation/index.html", _form_context(blank))


@router.post("/schedule", response_class=HTMLResponse)
async def create_schedule(
    request: Request,
    player_names: str = Form(""),
    num_matches: int = Form(config.DEFAULT_NUM_MATCHES),
    mode: Mode = Form(Mode.ONE_COURT),
):
    result = _generate(player_names, num_matches, mode)
    if not result.ok:
        return templates.TemplateResponse(
            request, "rotation/index.html", _form_context(result), status_code=400,
        )

    context = _form_context(result)
    context.update({
        "schedule": result.schedule,
        "text": result.text,
        "export_filename": config.EXPORT_FILENAME,
    })
    return templates.TemplateResponse(request, "rotation/schedule.html", context)


@router.post("/schedule/download")
async def download_schedule(
    player_names: str = Form(""),
    num_matches: int = Form(config.DEFAULT_NUM_MATCHES),
    mode: Mode = Form(Mode.ONE_COURT),
):
    result = _generate(player_names, num_matches, mode)
    if not result.ok:
        raise HTTPException(status_code=400, detail=result.error)

    return PlainTextResponse(
        result.text,
        headers={"Content-Disposition": f'attachment; filename="{config.EXPORT_FILENAME}"'},
    )


@router.post("/api/schedule")
async def api_schedule(payload: ScheduleIn):
    raw = payload.player_names
    if not isinstance(raw, str):
        raw = "\n".join(raw)

    result = _generate(raw, payload.num_matches, payload.mode)
    if not result.ok:
        raise HTTPException(status_code=400, detail=result.error)

    return {
        "mode": payload.mode.value,
        "players": result.players,
        "matches": schedule_to_dict(result.schedule),
        "text": result.text,
    }
