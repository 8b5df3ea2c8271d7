# ABOUTME: Unit tests for the ErrorEvent model
# ABOUTME: Tests status extraction and propagation control

import pytest

from onion.exceptions import HttpError
from onion.models.event import ErrorEvent


class TestErrorEvent:
    """Unit tests for ErrorEvent."""

    @pytest.mark.unit
    def test_event_creation(self):
        error = RuntimeError("x")
        event = ErrorEvent(error=error)

        assert event.error is error
        assert event.context is None
        assert event.id
        assert event.timestamp.tzinfo is not None
        assert event.propagation_stopped is False

    @pytest.mark.unit
    def test_status_from_error(self):
        assert ErrorEvent(error=HttpError(404)).status == 404
        assert ErrorEvent(error=RuntimeError()).status is None

    @pytest.mark.unit
    def test_stop_propagation(self):
        event = ErrorEvent(error=RuntimeError())

        event.stop_propagation()

        assert event.propagation_stopped is True

    @pytest.mark.unit
    def test_error_is_required(self):
        with pytest.raises(ValueError):
            ErrorEvent(error="not an exception")
