from typing import List

from .models import CreateMessageRequest, ForumMessage
from .result import Result


class ForumService:
	"""Feature module for a tournament's forum."""

	def __init__(self, request_callable, api):
		self._request = request_callable
		self._api = api

	async def list(self, tournament_id: str) -> Result:
		"""Messages of a tournament; accepts a bare array or ``{messages: [...]}``."""
		return await self._request(
			"GET", "/messages/tournament/{}", tournament_id,
			shape=List[ForumMessage], envelope=("messages", "data"),
		)

	async def post(self, tournament_id: str, content: str) -> Result:
		"""Post a message; the server answers ``{message: {...}}``."""
		body = CreateMessageRequest(tournament_id=tournament_id, content=content)
		return await self._request("POST", "/messages", shape=ForumMessage, envelope=("message", "data"), body=body)

	async def delete(self, message_id: str) -> Result:
		return await self._request("DELETE", "/messages/{}", message_id)
