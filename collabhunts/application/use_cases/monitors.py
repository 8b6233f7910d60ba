"""Run the booking monitors as a single scheduled pass."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from collabhunts.application.use_cases.deliveries import (
    DeliveryRunSummary,
    check_delivery_auto_release,
)
from collabhunts.application.use_cases.disputes import (
    DisputeRunSummary,
    check_dispute_deadlines,
)
from collabhunts.application.use_cases.notifications import NotificationBatch
from collabhunts.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


@dataclass
class MonitorRunSummary:
    """Outcome of one scheduled pass."""

    deliveries: DeliveryRunSummary | None
    disputes: DisputeRunSummary | None
    notifications_sent: int


def run_monitors(
    session: Session,
    *,
    now: datetime | None = None,
    include_deliveries: bool = True,
    include_disputes: bool = True,
) -> MonitorRunSummary:
    """Run the selected monitors and insert their notifications in one batch.

    The delivery monitor finishes before the dispute monitor starts. Both use
    the same ``now`` so a pass sees a single consistent point in time.
    """

    current_time = now or now_in_app_timezone()
    batch = NotificationBatch()

    deliveries = None
    if include_deliveries:
        deliveries = check_delivery_auto_release(session, batch=batch, now=current_time)

    disputes = None
    if include_disputes:
        disputes = check_dispute_deadlines(session, batch=batch, now=current_time)

    notifications_sent = batch.flush(session)
    return MonitorRunSummary(
        deliveries=deliveries,
        disputes=disputes,
        notifications_sent=notifications_sent,
    )


__all__ = ["MonitorRunSummary", "run_monitors"]
