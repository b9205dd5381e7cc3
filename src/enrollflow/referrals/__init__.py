"""Referrals package - referral credit ledger."""

from enrollflow.referrals.exceptions import ReferrerNotFoundError
from enrollflow.referrals.ledger import ReferralLedger

__all__ = [
    "ReferralLedger",
    "ReferrerNotFoundError",
]
