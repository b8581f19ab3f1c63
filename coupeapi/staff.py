from typing import List

from .models import CreateStaffRequest, ExistsResponse, Staff, UpdateStaffRequest, User
from .result import Result


class StaffService:
	"""Feature module for academy staff and referee membership."""

	def __init__(self, request_callable, api):
		self._request = request_callable
		self._api = api

	async def list_by_academie(self, academie_id: str) -> Result:
		"""Staff of an academy; the backend wraps the list as ``{staff: [...]}``."""
		return await self._request(
			"GET", "/staff/academie/{}", academie_id,
			shape=List[Staff], envelope=("staff", "data"),
		)

	async def get(self, staff_id: str) -> Result:
		return await self._request("GET", "/staff/{}", staff_id, shape=Staff, envelope=("staff", "data"))

	async def create(self, staff: CreateStaffRequest) -> Result:
		return await self._request("POST", "/staff", shape=Staff, envelope=("staff", "data"), body=staff)

	async def update(self, staff_id: str, changes: UpdateStaffRequest) -> Result:
		return await self._request("PATCH", "/staff/{}", staff_id, shape=Staff, envelope=("staff", "data"), body=changes)

	async def delete(self, staff_id: str) -> Result:
		return await self._request("DELETE", "/staff/{}", staff_id)

	async def arbitres_by_academie(self, academie_id: str) -> Result:
		return await self._request(
			"GET", "/staff/arbitres/{}", academie_id,
			shape=List[User], envelope=("arbitres", "data"),
		)

	async def add_arbitre(self, academie_id: str, arbitre_id: str) -> Result:
		return await self._request(
			"PATCH", "/staff/add-arbitre/{}", academie_id,
			body={"idArbitre": arbitre_id},
		)

	async def remove_arbitre(self, academie_id: str, arbitre_id: str) -> Result:
		return await self._request("DELETE", "/staff/remove-arbitre/{}/{}", academie_id, arbitre_id)

	async def arbitre_exists(self, academie_id: str, arbitre_id: str) -> Result:
		"""Result[bool]: whether the referee already belongs to the academy."""
		result = await self._request("GET", "/staff/exists/{}/{}", academie_id, arbitre_id, shape=ExistsResponse)
		return result.map(lambda r: r.exists)
