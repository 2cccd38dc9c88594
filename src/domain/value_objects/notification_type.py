from __future__ import annotations

from enum import Enum


class NotificationType(str, Enum):
    REMINDER = "REMINDER"
    SYSTEM = "SYSTEM"
    ACTIVITY_UPDATE = "ACTIVITY_UPDATE"
