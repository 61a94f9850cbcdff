"""Tests for eventwire.errors — exception hierarchy and error messages."""

import pytest

from eventwire.errors import (
    ConfigurationError,
    EmptyRepresentation,
    EventwireError,
    FormatError,
    InvalidMessageType,
    InvalidProducerResult,
    InvalidSinkResource,
    ServerNotInstalledError,
    UnknownFieldRenderer,
    type_name,
)
from eventwire.realtime.events import Comment


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls", [InvalidSinkResource, InvalidProducerResult, InvalidMessageType]
    )
    def test_misuse_errors_are_configuration_and_type_errors(self, cls: type) -> None:
        assert issubclass(cls, ConfigurationError)
        assert issubclass(cls, TypeError)

    def test_format_errors(self) -> None:
        assert issubclass(EmptyRepresentation, FormatError)
        assert issubclass(EmptyRepresentation, ValueError)
        assert issubclass(UnknownFieldRenderer, FormatError)
        assert issubclass(UnknownFieldRenderer, LookupError)

    @pytest.mark.parametrize(
        "cls", [ConfigurationError, FormatError, ServerNotInstalledError]
    )
    def test_everything_is_eventwire_error(self, cls: type) -> None:
        assert issubclass(cls, EventwireError)

    def test_server_not_installed_is_import_error(self) -> None:
        assert issubclass(ServerNotInstalledError, ImportError)


class TestMessages:
    def test_invalid_producer_result_names_type(self) -> None:
        err = InvalidProducerResult(None)
        assert err.actual_type == "None"
        assert "'None'" in str(err)

    def test_invalid_message_type_names_class(self) -> None:
        err = InvalidMessageType(Comment)
        assert err.actual_type == "type"

    def test_invalid_sink_reason(self) -> None:
        err = InvalidSinkResource(3, "no write() method")
        assert str(err).endswith("(no write() method).")

    def test_empty_representation_lists_fields(self) -> None:
        err = EmptyRepresentation(("comment", "data"))
        assert err.fields == ("comment", "data")
        assert "[comment, data]" in str(err)

    def test_unknown_field_renderer(self) -> None:
        assert UnknownFieldRenderer("event").field == "event"


class TestTypeName:
    def test_builtin(self) -> None:
        assert type_name([]) == "list"

    def test_user_class(self) -> None:
        assert type_name(Comment("x")) == "eventwire.realtime.events.Comment"
