"""Exceptions for the Referral Ledger."""

from enrollflow.record_store.exceptions import DependencyFailure


class ReferrerNotFoundError(DependencyFailure):
    """No account matches the referral code."""
