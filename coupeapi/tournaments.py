import logging
from typing import List, Optional

from .models import APIResponse, CreateCoupeRequest, Tournament
from .result import Result

logger = logging.getLogger(__name__)


class TournamentsService:
	"""Feature module for tournaments (``coupes``) and their brackets.

	Bracket generation and progression happen server-side; this only issues
	the calls and returns the tournament as the server reports it.
	"""

	def __init__(self, request_callable, api):
		self._request = request_callable
		self._api = api

	async def list(self) -> Result:
		"""Return all tournaments."""
		return await self._request("GET", "/coupes", shape=List[Tournament], envelope=("coupes", "data"))

	async def create(self, coupe: CreateCoupeRequest, token: Optional[str] = None) -> Result:
		"""
		Create a tournament.

		Args:
			coupe: tournament definition; dates are sent in the backend's fixed format
			token: bearer token to use instead of the stored session's

		Returns:
			Result[APIResponse] whose ``coupe`` is the created tournament
		"""
		return await self._request("POST", "/create-coupe", shape=APIResponse, body=coupe, token=token)

	async def add_participant(self, coupe_id: str, user_id: str) -> Result:
		"""
		Register a user in a tournament.

		Not deduplicated here: calling twice with the same user is left to the server.
		"""
		logger.info(f"Adding participant {user_id} to coupe {coupe_id}")
		return await self._request(
			"PATCH", "/add-participant/{}", coupe_id,
			shape=Tournament, envelope=("coupe", "data"), body={"userId": user_id},
		)

	async def generate_bracket(self, coupe_id: str) -> Result:
		"""Ask the server to generate the bracket; returns the updated tournament."""
		logger.info(f"Generating bracket for coupe {coupe_id}")
		return await self._request(
			"POST", "/{}/generate-bracket", coupe_id,
			shape=Tournament, envelope=("coupe", "data"),
		)
