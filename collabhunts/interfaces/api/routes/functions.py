"""HTTP triggers invoked by the scheduler to run the booking monitors."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from collabhunts.application.use_cases import MonitorRunSummary, run_monitors
from collabhunts.infrastructure.database import get_db
from collabhunts.interfaces.api.dependencies import require_cron_secret
from collabhunts.interfaces.api.schemas import MonitorRunResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["functions"])

_TRIGGER_METHODS = ["GET", "POST"]
_TRIGGER_DEPENDENCIES = [Depends(require_cron_secret)]
_TRIGGER_PATHS = (
    "/check-delivery-auto-release",
    "/check-dispute-deadlines",
    "/run-monitors",
)


def _summary_to_response(summary: MonitorRunSummary) -> MonitorRunResponse:
    return MonitorRunResponse(
        success=True,
        bookings_processed=(
            summary.deliveries.bookings_processed if summary.deliveries else None
        ),
        disputes_processed=(
            summary.disputes.disputes_processed if summary.disputes else None
        ),
        notifications_sent=summary.notifications_sent,
    )


def _run(
    db: Session, *, include_deliveries: bool, include_disputes: bool, job_name: str
) -> JSONResponse:
    try:
        summary = run_monitors(
            db,
            include_deliveries=include_deliveries,
            include_disputes=include_disputes,
        )
    except Exception as exc:
        db.rollback()
        logger.exception("Error running %s", job_name)
        payload = MonitorRunResponse(success=False, error=str(exc) or "Unknown error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=payload.model_dump(by_alias=True, exclude_none=True),
        )

    payload = _summary_to_response(summary)
    return JSONResponse(content=payload.model_dump(by_alias=True, exclude_none=True))


@router.api_route(
    "/check-delivery-auto-release",
    methods=_TRIGGER_METHODS,
    response_model=MonitorRunResponse,
    dependencies=_TRIGGER_DEPENDENCIES,
)
def check_delivery_auto_release(db: Session = Depends(get_db)) -> JSONResponse:
    """Send review reminders and auto-release deliveries past the review window."""

    return _run(
        db,
        include_deliveries=True,
        include_disputes=False,
        job_name="delivery auto-release",
    )


@router.api_route(
    "/check-dispute-deadlines",
    methods=_TRIGGER_METHODS,
    response_model=MonitorRunResponse,
    dependencies=_TRIGGER_DEPENDENCIES,
)
def check_dispute_deadlines(db: Session = Depends(get_db)) -> JSONResponse:
    """Remind dispute responders and escalate lapsed disputes to admins."""

    return _run(
        db,
        include_deliveries=False,
        include_disputes=True,
        job_name="dispute deadline check",
    )


@router.api_route(
    "/run-monitors",
    methods=_TRIGGER_METHODS,
    response_model=MonitorRunResponse,
    dependencies=_TRIGGER_DEPENDENCIES,
)
def run_all_monitors(db: Session = Depends(get_db)) -> JSONResponse:
    """Run both monitors in one pass with a shared notification batch."""

    return _run(
        db,
        include_deliveries=True,
        include_disputes=True,
        job_name="booking monitors",
    )


def preflight() -> Response:
    """Answer a plain ``OPTIONS`` request; browser preflights are handled by CORS."""

    return Response(status_code=status.HTTP_200_OK)


for _path in _TRIGGER_PATHS:
    router.add_api_route(
        _path, preflight, methods=["OPTIONS"], include_in_schema=False
    )


__all__ = ["router"]
