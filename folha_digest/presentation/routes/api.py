"""Control API: config read/update and the manual scrape-and-email trigger"""
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel

from ...infrastructure.rate_limit import RATE_LIMIT_MESSAGE
from ...services.pipeline_service import PipelineOutcome
from ...state import AppState

router = APIRouter()

CONFIG_UPDATED_MESSAGE = "Configurações atualizadas com sucesso"
PIPELINE_DONE_MESSAGE = "Scraping e envio de email concluídos"
PIPELINE_NO_DATA_MESSAGE = "Erro no scraping"


class ConfigUpdateRequest(BaseModel):
    # raw values: validation happens field by field in ConfigStore
    hour: Optional[Any] = None
    numberOfArticles: Optional[Any] = None


def get_state(request: Request) -> AppState:
    return request.app.state.news


def _rate_limited(request: Request, state: AppState = Depends(get_state)) -> None:
    client = request.client.host if request.client else "unknown"
    if not state.rate_limiter.hit(client):
        raise HTTPException(status_code=429, detail=RATE_LIMIT_MESSAGE)


@router.post("/config")
async def update_config(
    payload: Any = Body(default=None),
    state: AppState = Depends(get_state),
):
    """Update send hour and/or article count; invalid fields are ignored."""
    # any JSON is accepted; only an object can carry fields
    if isinstance(payload, dict):
        request = ConfigUpdateRequest.model_validate(payload)
    else:
        request = ConfigUpdateRequest()
    state.config_service.update(hour=request.hour, number_of_articles=request.numberOfArticles)
    return {"message": CONFIG_UPDATED_MESSAGE}


@router.get("/config")
async def get_config(state: AppState = Depends(get_state)):
    return state.config_service.current().to_dict()


@router.get("/scrape-and-email", dependencies=[Depends(_rate_limited)])
async def scrape_and_email(state: AppState = Depends(get_state)):
    """
    Run the pipeline once and wait for it.

    500 when no articles could be obtained for today.
    """
    logger.info("[Manual] Manual scrape and email requested")
    outcome = await state.pipeline.run()
    if outcome is PipelineOutcome.NO_DATA:
        logger.error("[Manual] Scrape failed, no data returned")
        return JSONResponse(status_code=500, content={"message": PIPELINE_NO_DATA_MESSAGE})
    return {"message": PIPELINE_DONE_MESSAGE}
