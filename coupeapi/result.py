"""
Result values returned by every endpoint operation.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .exceptions import CoupeException

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
	"""Either a decoded value or the error that prevented it.

	Operations never raise past their boundary; check ``ok`` or call
	``unwrap()`` to get the exception back.
	"""
	value: Optional[T] = None
	error: Optional[CoupeException] = None

	@classmethod
	def success(cls, value: T) -> "Result[T]":
		return cls(value=value)

	@classmethod
	def failure(cls, error: CoupeException) -> "Result[T]":
		return cls(error=error)

	@property
	def ok(self) -> bool:
		return self.error is None

	def unwrap(self) -> T:
		if self.error is not None:
			raise self.error
		return self.value

	def map(self, fn) -> "Result":
		"""Apply ``fn`` to the value of a successful result."""
		if self.error is not None:
			return self
		return Result.success(fn(self.value))
