"""FastAPI web application for tagup."""

from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from tagup.config import UpdateSettings
from tagup.models import (
    MergeRejected,
    MergeSucceeded,
    UpdateAvailable,
    UpdateError,
    UpdateOutcome,
    UpToDate,
)
from tagup.notify import format_outcome
from tagup.updater import check_updates, try_update

app = FastAPI(
    title="tagup",
    description="Check for and apply release updates to a git checkout",
    version="0.1.0",
)


class OutcomeResponse(BaseModel):
    """Response model for update checks and update attempts."""
    status: str
    level: str
    message: str
    current_version: Optional[str] = None
    latest_version: Optional[str] = None
    semver_delta: Optional[str] = None
    kind: Optional[str] = None
    detail: Optional[str] = None


def get_settings() -> UpdateSettings:
    """Settings for the managed repository, read from the environment."""
    try:
        return UpdateSettings.from_env()
    except ValidationError as e:
        raise HTTPException(status_code=500, detail=f"Invalid configuration: {e}")


@app.get("/api/status", response_model=OutcomeResponse)
async def status(settings: UpdateSettings = Depends(get_settings)):
    """Report whether a newer version is available."""
    outcome = await check_updates(settings)
    return _respond(outcome, "check", settings)


@app.post("/api/update", response_model=OutcomeResponse)
async def update(settings: UpdateSettings = Depends(get_settings)):
    """Merge the latest version into the managed checkout."""
    outcome = await try_update(settings)
    return _respond(outcome, "update", settings)


def _respond(outcome: UpdateOutcome, action: str, settings: UpdateSettings):
    """Build the HTTP response for an outcome."""
    body = _outcome_response(outcome, action, settings)

    if isinstance(outcome, MergeRejected):
        return JSONResponse(status_code=409, content=body.model_dump())
    if isinstance(outcome, UpdateError):
        return JSONResponse(status_code=500, content=body.model_dump())
    return body


def _outcome_response(
    outcome: UpdateOutcome, action: str, settings: UpdateSettings
) -> OutcomeResponse:
    """Convert an outcome into the response model."""
    changelog_url = None
    if isinstance(outcome, MergeSucceeded):
        changelog_url = settings.changelog_for(outcome.version.raw)
    level, message = format_outcome(outcome, action, changelog_url)

    response = OutcomeResponse(status=outcome.to_dict()["status"], level=level, message=message)

    if isinstance(outcome, UpToDate):
        response.current_version = outcome.version.raw
        response.latest_version = outcome.version.raw
    elif isinstance(outcome, UpdateAvailable):
        response.current_version = outcome.current.raw
        response.latest_version = outcome.latest.raw
        response.semver_delta = outcome.semver_delta
    elif isinstance(outcome, MergeSucceeded):
        response.current_version = outcome.version.raw
    elif isinstance(outcome, MergeRejected):
        response.detail = outcome.reason
    elif isinstance(outcome, UpdateError):
        response.kind = outcome.kind.value
        response.detail = outcome.detail

    return response
