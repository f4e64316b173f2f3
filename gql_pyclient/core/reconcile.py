"""Response reconciliation.

A GraphQL response can carry a failing HTTP status, GraphQL errors and data
all at once. ``parse_response`` folds the first two into one ErrorResponse
and decodes the data into the caller's result type when there is nothing
to report.

Precedence:
    - A body that is not a JSON object raises EnvelopeDecodeError, whatever
      the status code.
    - When ``errors`` is non-empty, ``data`` is not decoded even if present.
    - When the status is not 2xx, a DataDecodeError is dropped in favour of
      the NetworkError already recorded.
"""

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .errors import (
    DataDecodeError,
    EnvelopeDecodeError,
    ErrorResponse,
    NetworkError,
    ProtocolErrorList,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResponseEnvelope(BaseModel):
    """The top level of a GraphQL response body."""

    model_config = ConfigDict(extra="allow")

    data: Any = None
    errors: Any = None


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code <= 299


def decode_envelope(body: bytes) -> ResponseEnvelope:
    """Decode the top-level response object.

    Raises:
        EnvelopeDecodeError: If the body is not a JSON object
    """
    try:
        raw = json.loads(body)
    except ValueError as e:
        raise EnvelopeDecodeError(
            f"failed to decode data {body.decode('utf-8', errors='replace')}: {e}"
        ) from e
    if not isinstance(raw, dict):
        raise EnvelopeDecodeError(
            f"failed to decode data {body.decode('utf-8', errors='replace')}: "
            f"expected a JSON object, got {type(raw).__name__}"
        )
    return ResponseEnvelope.model_validate(raw)


def decode_data(data: Any, result_type: type[T] | None) -> T | Any:
    """Validate the ``data`` member into result_type.

    Without a result type, or when the server sent no data, the raw value is
    returned as is.

    Raises:
        DataDecodeError: If the data does not fit result_type
    """
    if result_type is None or data is None:
        return data
    try:
        return TypeAdapter(result_type).validate_python(data)
    except ValidationError as e:
        raise DataDecodeError(f"failed to decode data into response: {e}") from e


def decode_errors(errors: Any) -> ProtocolErrorList:
    """Validate a non-empty ``errors`` member.

    Raises:
        DataDecodeError: If the member is not a list of GraphQL error objects
    """
    try:
        return ProtocolErrorList.from_raw(errors)
    except ValidationError as e:
        raise DataDecodeError(f"failed to parse graphql errors: {e}") from e


def parse_response(body: bytes, status_code: int, result_type: type[T] | None = None) -> T | Any:
    """Reconcile an HTTP response into decoded data or one error.

    Args:
        body: Raw response body
        status_code: HTTP status code
        result_type: Type to decode ``data`` into (any type pydantic can validate)

    Returns:
        The decoded data

    Raises:
        EnvelopeDecodeError: If the body is not a JSON object
        DataDecodeError: If the status is 2xx and ``data``/``errors`` are malformed
        ErrorResponse: If the status is not 2xx or the server returned GraphQL errors
    """
    network_error = None
    graphql_errors = None
    is_ko_code = not is_success_status(status_code)
    if is_ko_code:
        network_error = NetworkError(
            code=status_code,
            message=f"Response body {body.decode('utf-8', errors='replace')}",
        )

    envelope = decode_envelope(body)

    result = None
    try:
        if envelope.errors:
            graphql_errors = decode_errors(envelope.errors)
        else:
            result = decode_data(envelope.data, result_type)
    except DataDecodeError:
        if not is_ko_code:
            raise
        logger.debug("Ignoring undecodable body of HTTP %d response", status_code)

    error_response = ErrorResponse(network_error, graphql_errors)
    if error_response.has_errors():
        raise error_response

    return result
