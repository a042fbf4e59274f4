"""Unit tests for the repository domain probe."""

from unittest.mock import MagicMock

import structlog

from aroma.infrastructure.observability import DefaultRepositoryProbe
from infrastructure.observability import ObservationContext


def _probe(**kwargs):
    logger = MagicMock(spec=structlog.stdlib.BoundLogger)
    return DefaultRepositoryProbe(entity="application", logger=logger, **kwargs), logger


class TestDefaultRepositoryProbe:
    """Tests for DefaultRepositoryProbe."""

    def test_creates_with_default_logger(self):
        """Probe should work without an explicit logger."""
        probe = DefaultRepositoryProbe(entity="user")
        assert probe._logger is not None

    def test_entity_saved_logs_info_with_entity_prefix(self):
        """entity_saved should log an info event named after the entity."""
        probe, logger = _probe()

        probe.entity_saved("app-1", owners=2)

        logger.info.assert_called_once_with(
            "application_saved", entity_id="app-1", owners=2
        )

    def test_entity_not_found_logs_debug(self):
        """Absent entities are routine and logged at debug."""
        probe, logger = _probe()

        probe.entity_not_found("app-1")

        logger.debug.assert_called_once_with("application_not_found", entity_id="app-1")

    def test_entities_listed_logs_count(self):
        """List queries should record their result size."""
        probe, logger = _probe()

        probe.entities_listed("owned_by", "user-1", 3)

        logger.debug.assert_called_once_with(
            "application_listed", query="owned_by", key="user-1", count=3
        )

    def test_invalid_argument_logs_warning(self):
        """Rejected calls should log a warning with the reason."""
        probe, logger = _probe()

        probe.invalid_argument("get_by_id", "application_id is not a valid UUID")

        logger.warning.assert_called_once_with(
            "application_invalid_argument",
            operation="get_by_id",
            reason="application_id is not a valid UUID",
        )

    def test_operation_failed_logs_error_with_cause(self):
        """Store failures should be logged at error level with the cause."""
        probe, logger = _probe()

        probe.operation_failed("save_application", RuntimeError("timeout"), application_id="a")

        logger.error.assert_called_once_with(
            "application_operation_failed",
            operation="save_application",
            error="timeout",
            error_type="RuntimeError",
            application_id="a",
        )

    def test_context_is_included(self):
        """Bound observation context should be added to every event."""
        probe, logger = _probe()
        bound = probe.with_context(ObservationContext(request_id="req-1"))

        bound.entity_deleted("app-1")

        logger.info.assert_called_once_with(
            "application_deleted", entity_id="app-1", request_id="req-1"
        )

    def test_with_context_returns_new_probe(self):
        """with_context should not mutate the original probe."""
        probe, logger = _probe()
        probe.with_context(ObservationContext(request_id="req-1"))

        probe.entity_retrieved("app-1")

        logger.debug.assert_called_once_with("application_retrieved", entity_id="app-1")
