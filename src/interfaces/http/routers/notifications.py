from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from src.application.interfaces.push_sender import PushSender
from src.application.use_cases.notifications import list_history, list_upcoming
from src.application.use_cases.push import send_test, subscribe, unsubscribe
from src.application.use_cases.push.subscribe import SubscribeInput
from src.config.settings import Settings
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.scheduler.reminder_tasks import delivery_options
from src.interfaces.http.deps import get_app_settings, get_auth_context, get_push_sender, get_uow
from src.interfaces.http.schemas.notifications import (
    FeedItemResponse,
    FeedResponse,
    NotificationHistoryResponse,
    NotificationSchema,
    SendTestRequest,
    SendTestResponse,
    SubscribeRequest,
    SubscriptionResponse,
    UnsubscribeResponse,
    VapidPublicKeyResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=FeedResponse)
async def upcoming_feed(
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> FeedResponse:
    items = await list_upcoming.execute(uow, context.profile_id)
    return FeedResponse(
        items=[FeedItemResponse.model_validate(item) for item in items], count=len(items)
    )


@router.get("/history", response_model=NotificationHistoryResponse)
async def notification_history(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> NotificationHistoryResponse:
    history = await list_history.execute(uow, context.profile_id, limit=limit, offset=offset)
    return NotificationHistoryResponse(
        items=[NotificationSchema.model_validate(item) for item in history.items],
        total=history.total,
        limit=history.limit,
        offset=history.offset,
    )


@router.get("/vapid-public-key", response_model=VapidPublicKeyResponse)
async def vapid_public_key(
    settings: Settings = Depends(get_app_settings),
) -> VapidPublicKeyResponse:
    return VapidPublicKeyResponse(public_key=settings.vapid_public_key)


@router.post(
    "/subscriptions", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED
)
async def subscribe_endpoint(
    payload: SubscribeRequest,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    sender: PushSender | None = Depends(get_push_sender),
    settings: Settings = Depends(get_app_settings),
) -> SubscriptionResponse:
    subscription = await subscribe.execute(
        uow,
        context.profile_id,
        SubscribeInput(
            endpoint=str(payload.endpoint), p256dh=payload.keys.p256dh, auth=payload.keys.auth
        ),
        sender=sender,
        options=delivery_options(settings),
    )
    return SubscriptionResponse.model_validate(subscription)


@router.delete("/subscriptions", response_model=UnsubscribeResponse)
async def unsubscribe_endpoint(
    endpoint: str | None = Query(None),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> UnsubscribeResponse:
    changed = await unsubscribe.execute(uow, context.profile_id, endpoint=endpoint)
    return UnsubscribeResponse(deactivated=changed)


@router.post("/test", response_model=SendTestResponse)
async def send_test_endpoint(
    payload: SendTestRequest,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    sender: PushSender | None = Depends(get_push_sender),
    settings: Settings = Depends(get_app_settings),
) -> SendTestResponse:
    result = await send_test.execute(
        uow,
        context.profile_id,
        payload.title,
        payload.message,
        sender=sender,
        options=delivery_options(settings),
        url=payload.url,
    )
    return SendTestResponse(sent=result.sent, failed=result.failed, errors=result.errors)
