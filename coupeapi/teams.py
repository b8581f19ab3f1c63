from typing import List

from .models import CreateTeamRequest, PopulatedTeam, Team, TeamStats, UpdateTeamRequest
from .result import Result


class TeamsService:
	"""Feature module for teams (``equipes``)."""

	def __init__(self, request_callable, api):
		self._request = request_callable
		self._api = api

	async def list(self) -> Result:
		return await self._request("GET", "/equipes", shape=List[Team], envelope=("equipes", "data"))

	async def get(self, team_id: str) -> Result:
		"""Return a team with its members expanded."""
		return await self._request("GET", "/equipes/{}", team_id, shape=PopulatedTeam, envelope=("equipe", "data"))

	async def create(self, team: CreateTeamRequest) -> Result:
		return await self._request("POST", "/equipes", shape=Team, envelope=("equipe", "data"), body=team)

	async def update(self, team_id: str, changes: UpdateTeamRequest) -> Result:
		return await self._request("PATCH", "/equipes/{}", team_id, shape=Team, envelope=("equipe", "data"), body=changes)

	async def delete(self, team_id: str) -> Result:
		return await self._request("DELETE", "/equipes/{}", team_id)

	async def stats(self, team_id: str) -> Result:
		"""Return the team's aggregated statistics."""
		return await self._request("GET", "/equipes/{}/stats", team_id, shape=TeamStats, envelope=("stats", "data"))
