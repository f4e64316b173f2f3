"""Scalar handlers for encoding GraphQL request variables.

Maps Python values that JSON cannot represent to the wire form GraphQL
servers expect for the usual custom scalars.

Example usage:
    from gql_pyclient.core.scalars import ScalarRegistry

    registry = ScalarRegistry()

    class MoneyHandler:
        python_type = Money

        def serialize(self, value):
            return f"{value.amount} {value.currency}"

    registry.register(MoneyHandler())
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from pydantic import BaseModel


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for scalar handlers.

    Attributes:
        python_type: The Python type this handler serializes (matched with isinstance)
    """

    python_type: type

    def serialize(self, value: Any) -> Any:
        """Convert Python value to JSON-serializable format for GraphQL."""
        ...


class DateTimeHandler:
    """Handler for DateTime scalars using ISO 8601 format."""

    python_type = datetime

    def serialize(self, value: datetime) -> str:
        return value.isoformat()


class DateHandler:
    """Handler for Date scalars using ISO 8601 date format."""

    python_type = date

    def serialize(self, value: date) -> str:
        return value.isoformat()


class UUIDHandler:
    """Handler for UUID scalars."""

    python_type = UUID

    def serialize(self, value: UUID) -> str:
        return str(value)


class DecimalHandler:
    """Handler for Decimal values, sent as strings to keep precision."""

    python_type = Decimal

    def serialize(self, value: Decimal) -> str:
        return str(value)


class EnumHandler:
    """Handler for GraphQL enums backed by Python Enum classes."""

    python_type = Enum

    def serialize(self, value: Enum) -> Any:
        return value.value


class ScalarRegistry:
    """Registry of scalar handlers, most recently registered consulted first.

    Example:
        registry = ScalarRegistry()
        registry.serialize({"at": datetime(2024, 1, 15)})  # {"at": "2024-01-15T00:00:00"}
    """

    def __init__(self):
        self._handlers: list[ScalarHandler] = []
        self._register_defaults()

    def _register_defaults(self):
        # datetime registered after date so it is matched first
        self.register(DateHandler())
        self.register(DateTimeHandler())
        self.register(UUIDHandler())
        self.register(DecimalHandler())
        self.register(EnumHandler())

    def register(self, handler: ScalarHandler):
        """Register a handler. Later registrations take precedence."""
        self._handlers.insert(0, handler)

    def get(self, value: Any) -> ScalarHandler | None:
        """Get the handler for a value, or None if no handler matches."""
        for handler in self._handlers:
            if isinstance(value, handler.python_type):
                return handler
        return None

    def serialize(self, value: Any) -> Any:
        """Recursively convert a value into JSON-compatible data."""
        if isinstance(value, BaseModel):
            return self.serialize(value.model_dump(by_alias=True, exclude_none=True))
        if isinstance(value, dict):
            return {key: self.serialize(v) for key, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self.serialize(v) for v in value]
        handler = self.get(value)
        if handler is not None:
            return handler.serialize(value)
        return value


_default_registry = ScalarRegistry()


def encode_variables(
    variables: dict[str, Any] | None,
    registry: ScalarRegistry | None = None,
) -> dict[str, Any] | None:
    """Convert request variables into JSON-compatible data."""
    if not variables:
        return None
    registry = registry or _default_registry
    return registry.serialize(variables)
