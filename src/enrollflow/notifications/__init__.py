"""Notifications package - outbound notifications and payment evidence lookup."""

from enrollflow.notifications.evidence import EvidenceStore, StaticEvidenceStore
from enrollflow.notifications.exceptions import DeliveryError
from enrollflow.notifications.sender import (
    LoggingNotificationSender,
    NotificationDispatcher,
    NotificationSender,
    WebhookNotificationSender,
)

__all__ = [
    "DeliveryError",
    "EvidenceStore",
    "LoggingNotificationSender",
    "NotificationDispatcher",
    "NotificationSender",
    "StaticEvidenceStore",
    "WebhookNotificationSender",
]
