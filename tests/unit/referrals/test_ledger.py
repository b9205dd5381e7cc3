"""Unit tests for the Referral Ledger."""

from unittest.mock import MagicMock

import pytest

from enrollflow.record_store import DependencyFailure, RecordStore
from enrollflow.referrals import ReferralLedger, ReferrerNotFoundError


@pytest.fixture
def store() -> RecordStore:
    """Create an in-memory RecordStore for testing."""
    return RecordStore(":memory:")


@pytest.mark.unit
class TestReferralLedger:
    """Tests for ReferralLedger.credit."""

    def test_credit_increments(self, store: RecordStore) -> None:
        """Each credit adds one."""
        store.create_account(name="Referrer", email="ref@example.com", external_id="TSTREF1")
        ledger = ReferralLedger(store)

        assert ledger.credit("TSTREF1") == 1
        assert ledger.credit(" TSTREF1 ") == 2

    def test_unknown_code_raises(self, store: RecordStore) -> None:
        """ReferrerNotFoundError is a soft dependency failure."""
        ledger = ReferralLedger(store)

        with pytest.raises(ReferrerNotFoundError) as exc_info:
            ledger.credit("TSTNONE")

        assert isinstance(exc_info.value, DependencyFailure)
        assert "TSTNONE" in str(exc_info.value)

    def test_credit_delegates_to_store(self) -> None:
        """The ledger never reads and writes separately."""
        store = MagicMock()
        store.increment_referral_count.return_value = 7

        assert ReferralLedger(store).credit("TSTREF1") == 7
        store.increment_referral_count.assert_called_once_with("TSTREF1")
