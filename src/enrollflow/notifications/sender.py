"""Notification senders and the fire-and-forget dispatcher."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

import httpx

from enrollflow.notifications.exceptions import DeliveryError

logger = logging.getLogger(__name__)


class NotificationSender(Protocol):
    """Interface for outbound account notifications."""

    def send(self, account_id: str, subject: str, body: str) -> None:
        """Deliver a notification.

        Raises:
            DeliveryError: If delivery fails.
        """
        ...


class LoggingNotificationSender:
    """Writes notifications to the log instead of delivering them."""

    def send(self, account_id: str, subject: str, body: str) -> None:
        logger.info("Notification for %s: %s", account_id, subject)
        logger.debug("Notification body for %s: %s", account_id, body)


class WebhookNotificationSender:
    """Posts notifications as JSON to a mail relay endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        token: str | None = None,
    ) -> None:
        """Initialize the webhook sender.

        Args:
            url: Relay endpoint receiving ``{"account_id", "subject", "body"}``
            timeout: Request timeout in seconds
            token: Optional bearer token for the relay
        """
        self.url = url
        self.timeout = timeout
        self.token = token
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            self._client = httpx.Client(headers=headers, timeout=self.timeout)
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def send(self, account_id: str, subject: str, body: str) -> None:
        try:
            response = self.client.post(
                self.url,
                json={"account_id": account_id, "subject": subject, "body": body},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise DeliveryError(f"Failed to deliver '{subject}' to {account_id}: {e}") from e


class NotificationDispatcher:
    """Hands notifications to a sender without making the caller wait.

    Delivery failures are logged and dropped; they never reach the caller.
    """

    def __init__(self, sender: NotificationSender, background: bool = True) -> None:
        """Initialize the dispatcher.

        Args:
            sender: Sender that performs the delivery.
            background: Deliver on a daemon thread. Disable for synchronous
                delivery (tests, scripts).
        """
        self.sender = sender
        self.background = background

    def dispatch(self, account_id: str, subject: str, body: str) -> threading.Thread | None:
        """Send a notification, on a background thread when enabled.

        Returns:
            The delivery thread, or None for synchronous delivery.
        """
        if not self.background:
            self._deliver(account_id, subject, body)
            return None

        thread = threading.Thread(
            target=self._deliver,
            args=(account_id, subject, body),
            name=f"notify-{account_id}",
            daemon=True,
        )
        thread.start()
        return thread

    def _deliver(self, account_id: str, subject: str, body: str) -> None:
        try:
            self.sender.send(account_id, subject, body)
        except DeliveryError as e:
            logger.warning("Notification to %s not delivered: %s", account_id, e)
        except Exception:
            # Non-fatal - a broken sender must not surface in the workflow
            logger.exception("Notification sender failed for %s", account_id)
