from typing import List

from .models import CreateStadiumRequest, Stadium, UpdateStadiumRequest
from .result import Result


class StadiumsService:
	"""Feature module for stadiums (``terrains``)."""

	def __init__(self, request_callable, api):
		self._request = request_callable
		self._api = api

	async def list(self) -> Result:
		"""All stadiums. The backend answers with a bare array or ``{data|terrains: [...]}``."""
		return await self._request("GET", "/terrains", shape=List[Stadium], envelope=("data", "terrains"))

	async def list_for_academie(self, academie_id: str) -> Result:
		"""Stadiums owned by one academy, filtered client-side."""
		result = await self.list()
		return result.map(lambda stadiums: [s for s in stadiums if s.id_academie == academie_id])

	async def get(self, stadium_id: str) -> Result:
		return await self._request("GET", "/terrains/{}", stadium_id, shape=Stadium, envelope=("terrain", "data"))

	async def create(self, stadium: CreateStadiumRequest) -> Result:
		return await self._request("POST", "/terrains", shape=Stadium, envelope=("terrain", "data"), body=stadium)

	async def update(self, stadium_id: str, changes: UpdateStadiumRequest) -> Result:
		return await self._request(
			"PATCH", "/terrains/{}", stadium_id,
			shape=Stadium, envelope=("terrain", "data"), body=changes,
		)

	async def delete(self, stadium_id: str) -> Result:
		return await self._request("DELETE", "/terrains/{}", stadium_id)
