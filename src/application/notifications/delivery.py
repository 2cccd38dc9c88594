from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable
from uuid import UUID

from src.application.errors import DeliveryError
from src.application.interfaces.push_sender import PushSender
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications.factory import DEFAULT_ICON
from src.domain.models.push_subscription import PushSubscription

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Push delivery is not configured"


@dataclass(slots=True, frozen=True)
class DeliveryOptions:
    max_concurrency: int = 8
    timeout: float = 10.0
    icon: str | None = DEFAULT_ICON


@dataclass(slots=True)
class DeliveryResult:
    subscription_id: UUID
    success: bool
    error: str | None = None
    status_code: int | None = None
    gone: bool = False


@dataclass(slots=True)
class DeliveryReport:
    results: list[DeliveryResult] = field(default_factory=list)

    @property
    def reached(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failures(self) -> list[DeliveryResult]:
        return [r for r in self.results if not r.success]

    @property
    def delivered_ids(self) -> list[UUID]:
        return [r.subscription_id for r in self.results if r.success]

    @property
    def gone_ids(self) -> list[UUID]:
        return [r.subscription_id for r in self.results if r.gone]


async def _deliver_one(
    sender: PushSender | None,
    subscription: PushSubscription,
    payload: dict[str, Any],
    semaphore: asyncio.Semaphore,
    timeout: float,
) -> DeliveryResult:
    if sender is None:
        return DeliveryResult(subscription.id, success=False, error=NOT_CONFIGURED_MESSAGE)
    async with semaphore:
        try:
            await asyncio.wait_for(sender.send(subscription, payload), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("Push delivery timed out: subscription=%s", subscription.id)
            return DeliveryResult(
                subscription.id, success=False, error=f"Timed out after {timeout:g}s"
            )
        except DeliveryError as exc:
            return DeliveryResult(
                subscription.id,
                success=False,
                error=exc.message,
                status_code=exc.upstream_status,
                gone=exc.is_gone,
            )
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Unexpected push delivery error: subscription=%s error=%s",
                subscription.id,
                exc,
                exc_info=True,
            )
            return DeliveryResult(subscription.id, success=False, error=str(exc) or repr(exc))
    return DeliveryResult(subscription.id, success=True)


async def deliver_to_subscriptions(
    sender: PushSender | None,
    subscriptions: Iterable[PushSubscription],
    payload: dict[str, Any],
    *,
    max_concurrency: int = 8,
    timeout: float = 10.0,
) -> DeliveryReport:
    """Send ``payload`` to every subscription concurrently, at most ``max_concurrency`` at once.

    Never raises for a delivery failure; each subscription gets exactly one result, in input
    order.
    """
    subscriptions = list(subscriptions)
    if not subscriptions:
        return DeliveryReport()
    semaphore = asyncio.Semaphore(max(1, max_concurrency))
    results = await asyncio.gather(
        *(_deliver_one(sender, s, payload, semaphore, timeout) for s in subscriptions)
    )
    return DeliveryReport(results=list(results))


async def apply_delivery_outcomes(
    uow: UnitOfWork, report: DeliveryReport, *, now: datetime | None = None
) -> None:
    """Refresh last-used time of reached subscriptions and deactivate gone ones."""
    now = now or datetime.now(timezone.utc)
    if report.delivered_ids:
        await uow.push_subscriptions.touch_last_used(report.delivered_ids, now)
    if report.gone_ids:
        deactivated = await uow.push_subscriptions.deactivate(report.gone_ids)
        logger.info("Deactivated %s gone push subscriptions: %s", deactivated, report.gone_ids)
