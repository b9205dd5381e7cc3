"""Referral Ledger - credits accounts for referred enrollments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from enrollflow.referrals.exceptions import ReferrerNotFoundError

if TYPE_CHECKING:
    from enrollflow.record_store import RecordStore

logger = logging.getLogger(__name__)


class ReferralLedger:
    """Increments referral credit, one unit per call.

    Callers are responsible for calling it at most once per approved request.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def credit(self, referrer_code: str) -> int:
        """Add one referral credit to the account owning the code.

        Args:
            referrer_code: The referrer's external ID.

        Returns:
            The referrer's new referral count.

        Raises:
            ReferrerNotFoundError: If no account owns the code.
        """
        new_count = self.store.increment_referral_count(referrer_code.strip())
        if new_count is None:
            raise ReferrerNotFoundError(f"No account found for referral code '{referrer_code}'")
        logger.info("Referral credited to %s (total=%d)", referrer_code, new_count)
        return new_count
