"""POST /scrape endpoint handler."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from src.api.schemas import ErrorResponse, ScrapeRequest, ScrapeResult
from src.api.service import run_scrape
from src.config import Settings
from src.scrape import AgentQLClient

router = APIRouter()


def get_client(request: Request) -> AgentQLClient:
    return request.app.state.client


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.post(
    "/scrape",
    response_model=list[ScrapeResult],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_scrape(
    body: ScrapeRequest,
    client: AgentQLClient = Depends(get_client),
    settings: Settings = Depends(get_app_settings),
):
    return await run_scrape(client, settings, body)
