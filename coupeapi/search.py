"""
Debounced referee search.

Typing replaces the pending search (one not yet sent) with a new one; a
search already sent to the server is left to finish. Responses are applied
last-request-wins: an older response never overwrites a newer one.
"""
import asyncio
import logging
import weakref
from typing import List, Optional

from .config import SEARCH_DEBOUNCE_SECONDS
from .exceptions import CoupeException
from .models import User
from .result import Result

logger = logging.getLogger(__name__)


class ArbitreSearch:
	"""Search-as-you-type state for the referee recruitment screen."""

	def __init__(self, users, delay: float = SEARCH_DEBOUNCE_SECONDS):
		"""
		Args:
			users: a UsersService (anything with ``async search_arbitres(query)``)
			delay: seconds to wait after the last keystroke before searching
		"""
		self._users = users
		self.delay = delay
		self.results: List[User] = []
		self.error: Optional[CoupeException] = None
		self._pending: Optional[asyncio.Task] = None
		# Tasks cancelled by a newer query, as opposed to by their caller
		self._superseded: "weakref.WeakSet[asyncio.Task]" = weakref.WeakSet()
		self._issued = 0
		self._applied = 0

	@property
	def is_pending(self) -> bool:
		return self._pending is not None and not self._pending.done()

	def update_query(self, query: str) -> Optional[asyncio.Task]:
		"""
		Register a new query.

		Must be called from a running event loop.

		Returns:
			The scheduled task (resolving to the Result, or None if superseded
			before firing), or None for a blank query.
		"""
		if self.is_pending:
			self._superseded.add(self._pending)
			self._pending.cancel()
		self._pending = None

		if not query or not query.strip():
			# Counts as the newest request so in-flight responses are dropped
			self._issued += 1
			self._applied = self._issued
			self.results = []
			self.error = None
			return None

		self._pending = asyncio.ensure_future(self._debounced(query))
		return self._pending

	async def _debounced(self, query: str) -> Optional[Result]:
		try:
			await asyncio.sleep(self.delay)
		except asyncio.CancelledError:
			task = asyncio.current_task()
			if task not in self._superseded:
				raise
			self._superseded.discard(task)
			logger.debug(f"Search for {query!r} superseded")
			return None

		# Fired: from here on a newer query no longer cancels this one
		self._pending = None
		self._issued += 1
		generation = self._issued
		result = await self._users.search_arbitres(query)
		self._apply(generation, result)
		return result

	def _apply(self, generation: int, result: Result) -> None:
		if generation <= self._applied:
			logger.debug(f"Dropping stale search response #{generation}")
			return
		self._applied = generation
		if result.ok:
			self.results = list(result.value)
			self.error = None
		else:
			self.error = result.error
