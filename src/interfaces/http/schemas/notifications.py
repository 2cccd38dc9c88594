from __future__ import annotations

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field

from src.domain.value_objects.activity_status import ActivityStatus
from src.domain.value_objects.notification_type import NotificationType
from src.interfaces.http.schemas.activities import AnimalSummaryResponse


class SubscriptionKeys(BaseModel):
    p256dh: str = Field(..., min_length=1)
    auth: str = Field(..., min_length=1)


class SubscribeRequest(BaseModel):
    endpoint: AnyHttpUrl
    keys: SubscriptionKeys


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    endpoint: str
    is_active: bool
    last_used_at: datetime | None = None


class UnsubscribeResponse(BaseModel):
    deactivated: int


class SendTestRequest(BaseModel):
    title: str = Field("ทดสอบการแจ้งเตือน", min_length=1, max_length=200)
    message: str = Field("นี่คือการแจ้งเตือนทดสอบจากฟาร์มของคุณ", min_length=1, max_length=1000)
    url: str | None = None


class SendTestResponse(BaseModel):
    sent: int
    failed: int
    errors: list[dict[str, Any]] = Field(default_factory=list)


class VapidPublicKeyResponse(BaseModel):
    public_key: str | None


class FeedItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    message: str
    activity_date: date
    reminder_date: date
    status: ActivityStatus
    animal: AnimalSummaryResponse
    is_read: bool = False
    type: str = "reminder"


class FeedResponse(BaseModel):
    items: list[FeedItemResponse]
    count: int


class NotificationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    activity_id: UUID | None = None
    type: NotificationType
    title: str
    message: str
    push_sent: bool
    push_sent_at: datetime | None = None
    is_read: bool
    created_at: datetime


class NotificationHistoryResponse(BaseModel):
    items: list[NotificationSchema]
    total: int
    limit: int
    offset: int


class ReminderRunResponse(BaseModel):
    success: bool
    timestamp: datetime
    totalActivities: int
    notificationsSent: int
    notificationsFailed: int
    errors: list[dict[str, Any]] = Field(default_factory=list)
    partial: bool = False
    skipped: int = 0
