"""
Exception types raised inside the client and delivered through results.
"""
from typing import Any, Optional


class CoupeException(Exception):
	""" Base class for every error the client can report. """


class ConfigurationError(CoupeException):
	""" The request could not be built (bad base URL, empty path parameter, no session). """


class NetworkError(CoupeException):
	""" The request never reached a response. """

	def __init__(self, cause: BaseException):
		self.cause = cause
		super().__init__(f"Network error: {cause}")


class ApiError(CoupeException):
	""" Server-reported failure (non-2xx status). """

	def __init__(self, status: int, message: str):
		self.status = status
		self.message = message
		super().__init__(f"({status}) {message}")


class Unauthorized(ApiError):
	""" 401 from the backend: missing or expired token. """


class EmptyBodyError(CoupeException):
	""" Success status but no body where one was required. """

	def __init__(self, status: int):
		self.status = status
		super().__init__(f"No data received (status {status})")


class DecodeError(CoupeException):
	""" Body present but it matches none of the accepted shapes. """

	def __init__(self, message: str, cause: Optional[BaseException] = None, body: Optional[bytes] = None):
		self.cause = cause
		self.body = body
		super().__init__(message if cause is None else f"{message}: {cause}")


class MalformedReferenceError(CoupeException):
	""" A participant/id field arrived in neither accepted shape. """

	def __init__(self, field: Optional[str], value: Any):
		self.field = field
		self.value = value
		super().__init__(f"Malformed reference in field '{field or '?'}': {value!r}")
