"""Unit tests for enrollflow logging configuration."""

import logging
import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from enrollflow.logging import ContactMaskingFilter, get_logger, mask_contact, setup_logging


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_creates_log_directory(self) -> None:
        """Log directory is created if it doesn't exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_dir = Path(tmpdir) / "nested" / "logs"
            setup_logging(log_dir=log_dir, console=False)

            assert log_dir.exists()

    def test_writes_to_log_file(self) -> None:
        """Component messages land in enrollflow.log with the shared format."""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup_logging(log_dir=tmpdir, console=False)
            logging.getLogger("enrollflow.workflow.workflow").info("request approved 123")

            content = (Path(tmpdir) / "enrollflow.log").read_text()
            assert "request approved 123" in content
            assert " | INFO     | enrollflow.workflow.workflow | " in content

    def test_log_level_configurable(self) -> None:
        """Log level filters messages appropriately."""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup_logging(log_dir=tmpdir, level="WARNING", console=False)
            logger = logging.getLogger("enrollflow")
            logger.info("should not appear")
            logger.warning("should appear")

            content = (Path(tmpdir) / "enrollflow.log").read_text()
            assert "should not appear" not in content
            assert "should appear" in content

    @patch.dict(os.environ, {"ENROLLFLOW_LOG_LEVEL": "DEBUG"})
    def test_log_level_from_env(self) -> None:
        """Log level can be set via environment variable."""
        with tempfile.TemporaryDirectory() as tmpdir:
            logger = setup_logging(log_dir=tmpdir, console=False)

            assert logger.level == logging.DEBUG

    def test_log_dir_from_env(self) -> None:
        """Log directory can be set via environment variable."""
        with (
            tempfile.TemporaryDirectory() as tmpdir,
            patch.dict(os.environ, {"ENROLLFLOW_LOG_DIR": tmpdir}),
        ):
            setup_logging(console=False)

            assert (Path(tmpdir) / "enrollflow.log").exists()

    def test_no_duplicate_handlers_on_repeated_setup(self) -> None:
        """Repeated setup_logging calls don't add duplicate handlers."""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup_logging(log_dir=tmpdir, console=False)
            setup_logging(log_dir=tmpdir, console=False)

            assert len(logging.getLogger("enrollflow").handlers) == 1

    def test_rotation_configured(self) -> None:
        """RotatingFileHandler is configured with the given limits."""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup_logging(log_dir=tmpdir, max_bytes=1024, backup_count=3, console=False)

            (handler,) = logging.getLogger("enrollflow").handlers
            assert handler.maxBytes == 1024
            assert handler.backupCount == 3


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_prefixes_enrollflow(self) -> None:
        """Logger name is prefixed with enrollflow."""
        assert get_logger("ratings").name == "enrollflow.ratings"

    def test_get_logger_no_double_prefix(self) -> None:
        """Already prefixed names are not double-prefixed."""
        assert get_logger("enrollflow.workflow").name == "enrollflow.workflow"


@pytest.mark.unit
class TestMaskContact:
    """Tests for mask_contact function."""

    def test_masks_email(self) -> None:
        """Only the first letter and the domain of an email survive."""
        assert mask_contact("asha.k@example.com") == "a***@example.com"

    def test_masks_phone_number(self) -> None:
        """Phone numbers keep their last two digits."""
        assert mask_contact("+91 98765 43210") == "[PHONE]**10"

    def test_masks_tokens(self) -> None:
        """Bearer tokens and token parameters are redacted."""
        result = mask_contact("Authorization: Bearer abc.def-123 url?token=xyz789")

        assert "abc.def-123" not in result
        assert "xyz789" not in result
        assert "Bearer [REDACTED]" in result
        assert "token=[REDACTED]" in result

    def test_leaves_plain_text(self) -> None:
        """Text without contact details is unchanged."""
        assert mask_contact("course python-basics") == "course python-basics"


@pytest.mark.unit
class TestContactMaskingFilter:
    """Tests for the masking filter installed on every handler."""

    def test_file_log_masks_unmasked_contact(self) -> None:
        """A component that logs raw contact details still writes them masked."""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup_logging(log_dir=tmpdir, console=False)
            logging.getLogger("enrollflow.notifications").info(
                "Sending to %s at %s", "asha.k@example.com", "+91 98765 43210"
            )

            content = (Path(tmpdir) / "enrollflow.log").read_text()
            assert "asha.k@example.com" not in content
            assert "98765 43210" not in content
            assert "Sending to a***@example.com at [PHONE]**10" in content

    def test_filter_leaves_plain_records_untouched(self) -> None:
        """Records without contact details keep their msg and args."""
        record = logging.LogRecord(
            "enrollflow.workflow", logging.INFO, __file__, 1, "Purged %d requests", (3,), None
        )

        assert ContactMaskingFilter().filter(record) is True
        assert record.msg == "Purged %d requests"
        assert record.args == (3,)

    def test_handlers_carry_filter(self) -> None:
        """File and console handlers both mask."""
        with tempfile.TemporaryDirectory() as tmpdir:
            logger = setup_logging(log_dir=tmpdir, console=True)

            assert len(logger.handlers) == 2
            for handler in logger.handlers:
                assert any(isinstance(f, ContactMaskingFilter) for f in handler.filters)
            setup_logging(log_dir=tmpdir, console=False)
