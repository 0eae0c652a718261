"""Routes raw gateway bodies to the success or error decoder."""

import json
import logging

from pydantic import ValidationError

from mpesa_daraja.errors import ApiError, ParseError
from mpesa_daraja.models import ErrorResponse

logger = logging.getLogger(__name__)

ERROR_MARKER = "errorCode"


def _load_object(raw_body, status):
    if isinstance(raw_body, (bytes, bytearray)):
        try:
            raw_body = raw_body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError("response body is not UTF-8", status=status) from exc
    if not raw_body or not raw_body.strip():
        raise ParseError("empty response body", status=status, body=raw_body)
    try:
        data = json.loads(raw_body)
    except json.JSONDecodeError as exc:
        raise ParseError(f"response body is not JSON: {exc.msg}", status=status, body=raw_body) from exc
    if not isinstance(data, dict):
        raise ParseError("response body is not a JSON object", status=status, body=raw_body)
    return data, raw_body


def classify(raw_body, success_model, status=None):
    """Decode ``raw_body`` as ``success_model`` or as an ErrorResponse.

    The error marker is checked first: a body carrying ``errorCode`` is never
    handed to the success decoder.

    Returns:
        An instance of ``success_model`` or an ErrorResponse.

    Raises:
        ParseError: the body is not a JSON object, or does not satisfy the
            shape it was routed to.
    """
    data, text = _load_object(raw_body, status)
    model = ErrorResponse if ERROR_MARKER in data else success_model
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ParseError(
            f"unexpected {model.__name__} body: {exc.error_count()} validation error(s)",
            status=status,
            body=text,
        ) from exc


def decode(raw_body, success_model, status=None):
    """Like ``classify`` but raises ApiError instead of returning an error body."""
    result = classify(raw_body, success_model, status=status)
    if isinstance(result, ErrorResponse):
        logger.warning("Gateway error %s: %s (request %s)",
                       result.error_code, result.error_message, result.request_id)
        raise ApiError(result.error_code, result.error_message, result.request_id)
    return result
