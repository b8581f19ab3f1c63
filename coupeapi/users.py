from typing import List

from .exceptions import ConfigurationError
from .models import APIResponse, User
from .result import Result


class UsersService:
	"""Feature module for user profiles and referee lookup."""

	def __init__(self, request_callable, api):
		self._request = request_callable
		self._api = api

	async def get(self, user_id: str) -> Result:
		"""Return a user's profile."""
		return await self._request("GET", "/users/{}", user_id, shape=User)

	async def update_profile(self, **fields) -> Result:
		"""
		Patch the logged-in user's profile.

		Only keys given with a non-None value are sent; the server leaves the
		others untouched. The stored user snapshot is refreshed on success.

		Args:
			fields: profile keys as the backend names them (nom, prenom, tel, picture ...)

		Returns:
			Result[APIResponse]; ConfigurationError when nobody is logged in
		"""
		user = self._api.sessions.user
		if user is None:
			return Result.failure(ConfigurationError("update_profile requires a logged-in session"))
		changes = {k: v for k, v in fields.items() if v is not None}
		result = await self._request("PATCH", "/users/{}", user.id, shape=APIResponse, body=changes)
		if result.ok and result.value.user is not None:
			self._api.sessions.update_user(result.value.user)
		return result

	async def search_arbitres(self, query: str) -> Result:
		"""
		Search referees by name or email.

		A blank query returns an empty list without calling the backend.
		"""
		if not query or not query.strip():
			return Result.success([])
		return await self._request(
			"GET", "/users/search/arbitres",
			shape=List[User],
			envelope=("arbitres", "users", "data"),
			query={"q": query},
		)
