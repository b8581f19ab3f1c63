from typing import List, Optional

from .models import Match, MatchStatus, UpdateMatchScoreRequest
from .result import Result


class MatchesService:
	"""Feature module for match detail and score entry."""

	def __init__(self, request_callable, api):
		self._request = request_callable
		self._api = api

	async def get(self, match_id: str) -> Result:
		"""Match with teams, stadium and referee expanded when the server populates them."""
		return await self._request("GET", "/match/{}", match_id, shape=Match, envelope=("match", "data"))

	async def update_score(
		self,
		match_id: str,
		score_eq1: int,
		score_eq2: int,
		statut: Optional[MatchStatus] = None,
	) -> Result:
		"""
		Patch a match's score and, optionally, its status.

		Returns:
			Result[Match] as stored by the server
		"""
		body = UpdateMatchScoreRequest(score_eq1=score_eq1, score_eq2=score_eq2, statut=statut)
		return await self._request(
			"PATCH", "/match/{}/score", match_id,
			shape=Match, envelope=("match", "data"), body=body,
		)

	async def list_by_tournament(self, tournament_id: str) -> Result:
		return await self._request(
			"GET", "/match/tournament/{}", tournament_id,
			shape=List[Match], envelope=("matches", "data"),
		)
