import logging

from .models import APIResponse, MessageResponse
from .result import Result
from .session import Session

logger = logging.getLogger(__name__)


class AuthService:
	"""Feature module for registration, login and password recovery.

	None of these endpoints take a token. Responses carrying both an
	``access_token`` and a ``user`` replace the stored session.
	"""

	def __init__(self, request_callable, api):
		# request_callable must have signature: (method, template, *params, **kwargs) -> Result
		self._request = request_callable
		self._api = api

	async def _post(self, path: str, body: dict, shape=APIResponse) -> Result:
		return await self._request("POST", path, shape=shape, body=body, authenticated=False)

	def _remember(self, result: Result) -> Result:
		if not result.ok:
			return result
		response = result.value
		if response.access_token and response.user is not None:
			self._api.sessions.save(Session(token=response.access_token, user=response.user))
		elif response.access_token:
			logger.warning("Auth response carried a token but no user; session not stored")
		return result

	async def register(
		self,
		*,
		nom: str,
		prenom: str,
		tel: str,
		email: str,
		age: str,
		role: str,
		password: str,
	) -> Result:
		"""Create an account. The backend then expects ``verify_code``."""
		body = {
			"nom": nom, "prenom": prenom, "tel": tel, "email": email,
			"age": age, "role": role, "password": password,
		}
		return self._remember(await self._post("/auth/register", body))

	async def login(self, email: str, password: str) -> Result:
		"""Log in and store the returned session."""
		result = self._remember(await self._post("/auth/login", {"email": email, "password": password}))
		if result.ok:
			logger.info(f"Logged in as {email}")
		return result

	async def verify_code(self, email: str, code: str) -> Result:
		"""Confirm the OTP sent after registration."""
		return self._remember(await self._post("/auth/verify-code", {"email": email, "code": code}))

	async def resend_code(self, email: str) -> Result:
		"""Resend the registration OTP."""
		return await self._post("/auth/send-code", {"email": email}, shape=MessageResponse)

	async def forgot_password(self, email: str) -> Result:
		return await self._post("/auth/forgot-password", {"email": email})

	async def verify_reset_code(self, email: str, code: str) -> Result:
		return await self._post("/auth/forgot-password/verify-code", {"email": email, "code": code})

	async def reset_password(self, email: str, code: str, new_password: str, confirm_password: str) -> Result:
		body = {
			"email": email,
			"code": code,
			"newPassword": new_password,
			"confirmPassword": confirm_password,
		}
		return await self._post("/auth/forgot-password/reset", body)

	def logout(self) -> None:
		"""Drop the stored token and user snapshot together."""
		self._api.sessions.clear()
