"""
Turns an httpx response into a Result of the expected shape.

Rules, in order:
	non-2xx            -> ApiError (message from a ``{message}`` body, else the status)
	2xx, empty body    -> success only for NO_CONTENT_SHAPES, else EmptyBodyError
	2xx, body          -> direct decode, then each envelope key, else DecodeError
"""
import json
import logging
from functools import lru_cache
from typing import Any, Optional, Sequence

import httpx
from pydantic import TypeAdapter, ValidationError

from .exceptions import ApiError, DecodeError, EmptyBodyError, MalformedReferenceError, Unauthorized
from .models import MessageResponse
from .result import Result

logger = logging.getLogger(__name__)

# Shapes for which a 2xx without body is a success (void operations pass shape=None)
NO_CONTENT_SHAPES = (MessageResponse,)


@lru_cache(maxsize=None)
def _adapter(shape) -> TypeAdapter:
	return TypeAdapter(shape)


def api_error(status: int, content: bytes) -> ApiError:
	"""Build the error for a non-2xx response."""
	message = None
	try:
		body = json.loads(content) if content else None
	except ValueError:
		body = None
	if isinstance(body, dict):
		raw = body.get("message")
		if isinstance(raw, str) and raw:
			message = raw
		elif isinstance(raw, list) and raw:
			message = "; ".join(str(m) for m in raw)
	if message is None:
		message = f"Server error: {status}"
	cls = Unauthorized if status == 401 else ApiError
	return cls(status, message)


def decode_body(data: Any, shape, envelope: Sequence[str] = ()) -> Any:
	"""
	Validate parsed JSON into ``shape``, falling back to envelope keys.

	Args:
		data: parsed JSON value
		shape: type to validate into (model class or e.g. ``List[Stadium]``)
		envelope: keys that may wrap the payload, tried in order

	Returns:
		The decoded value.

	Raises:
		DecodeError: no attempt matched; ``cause`` is the direct attempt's error
		MalformedReferenceError: a reference field is in neither accepted shape
	"""
	adapter = _adapter(shape)
	try:
		return adapter.validate_python(data)
	except ValidationError as first_error:
		if isinstance(data, dict):
			for key in envelope:
				if key not in data:
					continue
				try:
					value = adapter.validate_python(data[key])
				except ValidationError as e:
					logger.debug(f"Envelope '{key}' did not match: {e.error_count()} errors")
					continue
				logger.debug(f"Decoded {shape} from envelope '{key}'")
				return value
		raise DecodeError(f"Response does not match {getattr(shape, '__name__', shape)}", cause=first_error)


def decode_response(response: httpx.Response, shape=None, envelope: Sequence[str] = ()) -> Result:
	"""
	Map a received response onto a Result.

	Args:
		response: httpx response (transport errors are handled by the caller)
		shape: expected type; None for operations that return nothing
		envelope: keys that may wrap the payload

	Returns:
		Result with the decoded value or a CoupeException
	"""
	status = response.status_code
	content = response.content or b""

	if not 200 <= status < 300:
		return Result.failure(api_error(status, content))

	if shape is None:
		return Result.success(None)

	if not content.strip():
		if shape in NO_CONTENT_SHAPES:
			return Result.success(shape())
		return Result.failure(EmptyBodyError(status))

	try:
		data = json.loads(content)
	except ValueError as e:
		return Result.failure(DecodeError("Response body is not JSON", cause=e, body=content))

	try:
		return Result.success(decode_body(data, shape, envelope))
	except DecodeError as e:
		e.body = content
		logger.warning(f"Decoding error (status {status}): {e}")
		return Result.failure(e)
	except MalformedReferenceError as e:
		logger.warning(f"Malformed reference: {e}")
		return Result.failure(e)
