"""
Tests for the debounced referee search.
"""
import asyncio
from typing import Dict, List

import pytest

from coupeapi.exceptions import NetworkError
from coupeapi.models import User
from coupeapi.result import Result
from coupeapi.search import ArbitreSearch

from ..mocks.backend import user_json


class FakeUsers:
	"""Records searches; each answer is held until ``release(query)``."""

	def __init__(self, hold: bool = False):
		self.calls: List[str] = []
		self.hold = hold
		self._gates: Dict[str, asyncio.Event] = {}
		self.failures: Dict[str, Exception] = {}

	async def search_arbitres(self, query: str) -> Result:
		self.calls.append(query)
		if self.hold:
			gate = self._gates.setdefault(query, asyncio.Event())
			await gate.wait()
		if query in self.failures:
			return Result.failure(self.failures[query])
		return Result.success([User.model_validate(user_json(f"id-{query}", nom=query))])

	def release(self, query: str):
		self._gates.setdefault(query, asyncio.Event()).set()

	async def wait_for_call(self, query: str):
		async def poll():
			while query not in self.calls:
				await asyncio.sleep(0)
		await asyncio.wait_for(poll(), timeout=1)


@pytest.mark.asyncio
async def test_blank_query_clears_without_calling():
	users = FakeUsers()
	search = ArbitreSearch(users, delay=0)
	search.results = [User.model_validate(user_json())]

	assert search.update_query("   ") is None
	assert search.results == []
	assert users.calls == []


@pytest.mark.asyncio
async def test_typing_replaces_pending_search():
	users = FakeUsers()
	search = ArbitreSearch(users, delay=0.05)

	first = search.update_query("al")
	await asyncio.sleep(0)
	second = search.update_query("ali")

	assert await first is None
	result = await second
	assert result.ok
	assert users.calls == ["ali"]
	assert [u.nom for u in search.results] == ["ali"]
	assert not search.is_pending


@pytest.mark.asyncio
async def test_older_response_never_overwrites_newer():
	users = FakeUsers(hold=True)
	search = ArbitreSearch(users, delay=0)

	old = search.update_query("old")
	await users.wait_for_call("old")
	new = search.update_query("new")
	await users.wait_for_call("new")

	users.release("new")
	await new
	users.release("old")
	await old

	assert users.calls == ["old", "new"]
	assert [u.nom for u in search.results] == ["new"]


@pytest.mark.asyncio
async def test_clearing_drops_in_flight_response():
	users = FakeUsers(hold=True)
	search = ArbitreSearch(users, delay=0)

	task = search.update_query("ali")
	await users.wait_for_call("ali")
	search.update_query("")
	users.release("ali")
	await task

	assert search.results == []


@pytest.mark.asyncio
async def test_error_is_exposed_and_results_kept():
	users = FakeUsers()
	search = ArbitreSearch(users, delay=0)
	await search.update_query("ali")
	assert [u.nom for u in search.results] == ["ali"]

	users.failures["alix"] = NetworkError(OSError("offline"))
	await search.update_query("alix")
	assert isinstance(search.error, NetworkError)
	assert [u.nom for u in search.results] == ["ali"]


@pytest.mark.asyncio
async def test_search_through_service(api, backend, logged_in):
	backend.add("GET", "/users/search/arbitres", {"arbitres": [user_json("u9", role="ARBITRE")]})
	search = ArbitreSearch(api.users, delay=0)
	await search.update_query("tra")
	assert backend.last.url.params["q"] == "tra"
	assert [u.id for u in search.results] == ["u9"]


@pytest.mark.asyncio
async def test_caller_cancellation_propagates():
	users = FakeUsers()
	search = ArbitreSearch(users, delay=0.05)

	task = search.update_query("ali")
	await asyncio.sleep(0)
	task.cancel()

	with pytest.raises(asyncio.CancelledError):
		await task
	assert users.calls == []
