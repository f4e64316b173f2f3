"""Tests for variable encoding."""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from gql_pyclient.core.scalars import (
    DateHandler,
    DateTimeHandler,
    DecimalHandler,
    EnumHandler,
    ScalarHandler,
    ScalarRegistry,
    UUIDHandler,
    encode_variables,
)


class Color(Enum):
    RED = "RED"
    GREEN = "GREEN"


class AddUserInput(BaseModel):
    first_name: str = Field(alias="firstName")
    nickname: str | None = None
    born: date | None = None


class TestHandlers:
    """Tests for the built-in handlers."""

    def test_datetime(self):
        handler = DateTimeHandler()
        assert handler.serialize(datetime(2024, 1, 15, 10, 30, 0)) == "2024-01-15T10:30:00"

    def test_datetime_with_timezone(self):
        handler = DateTimeHandler()
        dt = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)
        assert handler.serialize(dt) == "2024-01-15T10:30:00+00:00"

    def test_date(self):
        assert DateHandler().serialize(date(2024, 1, 15)) == "2024-01-15"

    def test_uuid(self):
        value = UUID("12345678-1234-5678-1234-567812345678")
        assert UUIDHandler().serialize(value) == "12345678-1234-5678-1234-567812345678"

    def test_decimal(self):
        assert DecimalHandler().serialize(Decimal("10.50")) == "10.50"

    def test_enum(self):
        assert EnumHandler().serialize(Color.RED) == "RED"

    def test_handlers_are_scalar_handlers(self):
        for handler in (DateTimeHandler(), DateHandler(), UUIDHandler(), DecimalHandler(), EnumHandler()):
            assert isinstance(handler, ScalarHandler)


class TestScalarRegistry:
    """Tests for ScalarRegistry."""

    def test_datetime_matched_before_date(self):
        registry = ScalarRegistry()
        assert isinstance(registry.get(datetime(2024, 1, 1)), DateTimeHandler)
        assert isinstance(registry.get(date(2024, 1, 1)), DateHandler)

    def test_unknown_value_has_no_handler(self):
        assert ScalarRegistry().get("plain") is None

    def test_custom_handler_takes_precedence(self):
        class EpochHandler:
            python_type = datetime

            def serialize(self, value):
                return int(value.timestamp())

        registry = ScalarRegistry()
        registry.register(EpochHandler())
        dt = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert registry.serialize(dt) == int(dt.timestamp())

    def test_serializes_nested_structures(self):
        registry = ScalarRegistry()
        result = registry.serialize({
            "ids": (UUID(int=1), UUID(int=2)),
            "filter": {"color": Color.GREEN, "since": date(2024, 2, 1)},
        })
        assert result == {
            "ids": [str(UUID(int=1)), str(UUID(int=2))],
            "filter": {"color": "GREEN", "since": "2024-02-01"},
        }

    def test_serializes_pydantic_models_by_alias(self):
        registry = ScalarRegistry()
        result = registry.serialize(AddUserInput(firstName="Ada", born=date(1815, 12, 10)))
        assert result == {"firstName": "Ada", "born": "1815-12-10"}

    def test_keeps_explicit_none(self):
        assert ScalarRegistry().serialize({"cursor": None}) == {"cursor": None}


class TestEncodeVariables:
    """Tests for encode_variables."""

    def test_empty_variables(self):
        assert encode_variables(None) is None
        assert encode_variables({}) is None

    def test_uses_default_registry(self):
        assert encode_variables({"at": datetime(2024, 1, 15)}) == {"at": "2024-01-15T00:00:00"}

    def test_leaves_unknown_objects_alone(self):
        """Test values with no handler are passed through for the encoder to reject."""
        marker = object()
        assert encode_variables({"x": marker}) == {"x": marker}
