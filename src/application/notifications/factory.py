from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

REMINDER_TITLE = "ฟาร์มแจ้งเตือน"
WELCOME_TITLE = "ยินดีต้อนรับ!"
WELCOME_MESSAGE = "คุณได้เปิดใช้งานการแจ้งเตือนสำหรับฟาร์มแล้ว"
DEFAULT_ICON = "/jaothui-logo.png"
DEFAULT_URL = "/dashboard"


@dataclass(slots=True)
class PushPayload:
    title: str
    body: str
    icon: str | None = DEFAULT_ICON
    data: dict[str, Any] = field(default_factory=dict)
    tag: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": self.title, "body": self.body}
        if self.icon:
            payload["icon"] = self.icon
        if self.data:
            payload["data"] = self.data
        if self.tag:
            payload["tag"] = self.tag
        return payload


def reminder_message(animal_name: str, activity_title: str) -> str:
    return f"{animal_name}: {activity_title}"


def build_reminder_payload(
    *,
    activity_id: UUID,
    activity_title: str,
    animal_name: str,
    animal_code: str,
    icon: str | None = DEFAULT_ICON,
) -> PushPayload:
    """Payload for a due activity reminder; the deep link opens the activity page."""
    return PushPayload(
        title=REMINDER_TITLE,
        body=reminder_message(animal_name, activity_title),
        icon=icon,
        data={
            "url": f"/dashboard/activities/{activity_id}?returnTo=notification",
            "activityId": str(activity_id),
            "animalId": animal_code,
        },
        tag=f"reminder-{activity_id}",
    )


def build_system_payload(
    title: str, message: str, url: str | None = None, *, icon: str | None = DEFAULT_ICON
) -> PushPayload:
    return PushPayload(
        title=title,
        body=message,
        icon=icon,
        data={"url": url or DEFAULT_URL},
        tag="system-notification",
    )


def build_welcome_payload(*, icon: str | None = DEFAULT_ICON) -> PushPayload:
    return build_system_payload(WELCOME_TITLE, WELCOME_MESSAGE, icon=icon)
