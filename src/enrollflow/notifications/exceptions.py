"""Exceptions for notification delivery."""

from enrollflow.record_store.exceptions import DependencyFailure


class DeliveryError(DependencyFailure):
    """A notification could not be delivered."""
