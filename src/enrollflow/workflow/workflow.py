"""EnrollmentWorkflow - Enrollment request state machine."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from enrollflow.logging import mask_contact
from enrollflow.record_store import DuplicatePaymentReferenceError, InvalidPaymentReferenceError
from enrollflow.referrals import ReferrerNotFoundError
from enrollflow.workflow.models import (
    ApprovalResult,
    RejectionResult,
    RestoreResult,
    SubmissionResult,
)

if TYPE_CHECKING:
    from enrollflow.notifications import EvidenceStore, NotificationDispatcher
    from enrollflow.record_store import (
        ArchivedEnrollmentRequest,
        EnrollmentRequest,
        RecordStore,
        RequestStatus,
    )
    from enrollflow.referrals import ReferralLedger

logger = logging.getLogger(__name__)


class EnrollmentWorkflow:
    """Drives enrollment requests through review and the Archive.

    The workflow owns the side effects of each admin action:
    - Submission creates a pending request and a pending enrollment
    - Approval activates the enrollment, counts the student once,
      credits the referrer once and notifies the learner
    - Rejection drops a never-activated enrollment
    - Deletion moves requests into the Archive, restore moves them back

    Nothing here holds locks. Re-running any operation after a crash or a
    double click converges on the same records.
    """

    def __init__(
        self,
        store: RecordStore,
        ledger: ReferralLedger,
        notifier: NotificationDispatcher,
        evidence_store: EvidenceStore,
    ) -> None:
        """Initialize the workflow.

        Args:
            store: RecordStore instance for persistence.
            ledger: ReferralLedger crediting referrers.
            notifier: Dispatcher for learner notifications.
            evidence_store: Resolves payment evidence references to URLs.
        """
        self.store = store
        self.ledger = ledger
        self.notifier = notifier
        self.evidence_store = evidence_store

    # --- Submission ---

    def submit(
        self,
        account_id: str,
        course_ref: str,
        payment_ref: str,
        evidence_ref: str,
        referrer_code: str | None = None,
        email: str | None = None,
        mobile_number: str = "",
        amount: float | None = None,
        transaction_notes: str | None = None,
    ) -> SubmissionResult:
        """Record a learner's claim of payment for a course.

        Args:
            account_id: Requesting account.
            course_ref: Course ID or slug.
            payment_ref: Payment reference token (unique among live requests).
            evidence_ref: Reference of the payment screenshot.
            referrer_code: External ID of the referring account, if any.
            email: Contact email (defaults to the account's email).
            mobile_number: Contact phone number.
            amount: Amount paid.
            transaction_notes: Free-text notes from the learner.

        Returns:
            SubmissionResult with the pending request and the pair's enrollment.

        Raises:
            CourseNotFoundError: If the course cannot be resolved.
            AccountNotFoundError: If the account does not exist.
            InvalidPaymentReferenceError: If the token is blank.
            DuplicatePaymentReferenceError: If the token is already in use.
        """
        course = self.store.resolve_course(course_ref)
        account = self.store.get_account(account_id)
        payment_ref = payment_ref.strip()
        if not payment_ref:
            raise InvalidPaymentReferenceError("Payment reference must not be blank")

        request = self.store.create_request(
            account_id=account.id,
            course=course,
            email=email or account.email,
            mobile_number=mobile_number,
            payment_ref=payment_ref,
            evidence_ref=evidence_ref,
            amount=amount,
            transaction_notes=transaction_notes,
            referrer_code=(referrer_code or "").strip() or None,
        )
        logger.info(
            "Enrollment request %s submitted by %s for %s (contact=%s)",
            request.id,
            account.id,
            course.slug,
            mask_contact(f"{request.email} {request.mobile_number}".strip()),
        )

        # A separate step: if it is lost, approval creates the enrollment anyway
        enrollment, created = self.store.ensure_pending_enrollment(account.id, course.id)
        if not created:
            logger.info(
                "Enrollment for %s in %s already exists with status %s",
                account.id,
                course.slug,
                enrollment.status,
            )

        return SubmissionResult(request=request, enrollment=enrollment, enrollment_created=created)

    # --- Review ---

    def approve(self, request_id: str) -> ApprovalResult:
        """Approve a request. Safe to call repeatedly.

        Raises:
            RequestNotFoundError: If the request does not exist.
            InvalidTransitionError: If the request was rejected.
        """
        outcome = self.store.approve_request(request_id)
        request = outcome.request

        if not outcome.transitioned:
            logger.info("Enrollment request %s already approved, nothing to do", request_id)
            return ApprovalResult(request=request, already_approved=True)

        logger.info(
            "Enrollment request %s approved (enrollment %s)",
            request_id,
            "activated" if outcome.activated else "already active",
        )

        credited = False
        if request.referrer_code:
            credited = self._credit_referrer(request)

        self._notify(
            request,
            subject=f"Enrollment approved: {request.course_title}",
            body=(
                f"Your payment {request.payment_ref} has been verified and you now have "
                f"access to {request.course_title}."
            ),
        )

        return ApprovalResult(
            request=request,
            already_approved=False,
            enrollment_activated=outcome.activated,
            referral_credited=credited,
        )

    def reject(self, request_id: str, reason: str | None = None) -> RejectionResult:
        """Reject a pending request.

        Raises:
            RequestNotFoundError: If the request does not exist.
            InvalidTransitionError: If the request was already approved.
        """
        request, changed = self.store.reject_request(request_id, reason)
        if not changed:
            logger.info("Enrollment request %s already rejected, nothing to do", request_id)
            return RejectionResult(request=request, already_rejected=True)

        logger.info("Enrollment request %s rejected", request_id)
        self._notify(
            request,
            subject=f"Enrollment request declined: {request.course_title}",
            body=reason or f"We could not verify payment {request.payment_ref}.",
        )
        return RejectionResult(request=request, already_rejected=False)

    # --- Archive ---

    def delete(self, request_ids: Sequence[str]) -> list[EnrollmentRequest]:
        """Move requests into the Archive.

        Unknown IDs are skipped.

        Returns:
            The deleted requests as they were, so a client can offer undo.
        """
        deleted = []
        for request_id in dict.fromkeys(request_ids):
            request = self.store.archive_request(request_id)
            if request is None:
                logger.debug("Enrollment request %s not found for deletion", request_id)
                continue
            logger.info("Enrollment request %s archived (status=%s)", request_id, request.status)
            deleted.append(request)
        return deleted

    def restore(self, request_ids: Sequence[str]) -> RestoreResult:
        """Move archived requests back with their original IDs and timestamps.

        IDs that are not archived are skipped silently.
        """
        result = RestoreResult()
        for request_id in dict.fromkeys(request_ids):
            try:
                request = self.store.restore_request(request_id)
            except DuplicatePaymentReferenceError as e:
                logger.warning("Enrollment request %s left in archive: %s", request_id, e)
                result.conflicts.append(request_id)
                continue
            if request is None:
                continue
            logger.info("Enrollment request %s restored (status=%s)", request_id, request.status)
            result.restored.append(request)
        return result

    def purge(self, request_ids: Sequence[str]) -> int:
        """Permanently remove archived requests.

        Returns:
            Number of archive entries removed.
        """
        purged = self.store.purge_archived(list(dict.fromkeys(request_ids)))
        logger.info("Purged %d archived enrollment requests", purged)
        return purged

    # --- Queries ---

    def get_request(self, request_id: str) -> EnrollmentRequest:
        """Get a live request by ID."""
        return self.store.get_request(request_id)

    def list_requests(self, status: RequestStatus | None = None) -> list[EnrollmentRequest]:
        """List live requests, optionally by status."""
        return self.store.list_requests(status=status)

    def list_archive(self) -> list[ArchivedEnrollmentRequest]:
        """List archived requests."""
        return self.store.list_archive()

    def evidence_url(self, request: EnrollmentRequest | ArchivedEnrollmentRequest) -> str:
        """URL of the request's payment evidence, for admin review."""
        return self.evidence_store.resolve(request.evidence_ref)

    # --- Side effects ---

    def _credit_referrer(self, request: EnrollmentRequest) -> bool:
        """Credit the request's referrer. Failures are logged, never raised."""
        assert request.referrer_code is not None
        try:
            self.ledger.credit(request.referrer_code)
        except ReferrerNotFoundError as e:
            logger.warning("Referral for request %s not credited: %s", request.id, e)
            return False
        return True

    def _notify(self, request: EnrollmentRequest, subject: str, body: str) -> None:
        """Fire-and-forget notification to the requesting account."""
        self.notifier.dispatch(request.account_id, subject, body)
