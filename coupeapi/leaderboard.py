from typing import List

from .models import LeaderboardEntry
from .result import Result


class LeaderboardService:
	"""Feature module for tournament standings (read-only, computed server-side)."""

	def __init__(self, request_callable, api):
		self._request = request_callable
		self._api = api

	async def standings(self, tournament_id: str) -> Result:
		"""Standings rows; accepts a bare array or ``{leaderboard|standings|data: [...]}``."""
		return await self._request(
			"GET", "/coupe/{}/standings", tournament_id,
			shape=List[LeaderboardEntry],
			envelope=("leaderboard", "standings", "data"),
		)
