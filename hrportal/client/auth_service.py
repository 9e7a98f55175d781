"""Auth calls against the HR portal API, on top of ApiClient."""

from __future__ import annotations

import logging
from typing import Any, Dict

from hrportal.client.api_client import ApiClient
from hrportal.client.errors import ApiError

logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def _call(self, action: str, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, url, **kwargs)
        except ApiError as exc:
            logger.warning("%s failed: %s", action, exc.message)
            raise AuthServiceError(exc.message or f"{action} failed", exc.status_code) from exc
        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    async def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return await self._call(
            "Registration", "POST", "/auth/register",
            json={"name": name, "email": email, "password": password},
            skip_refresh=True,
        )

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        return await self._call("Login", "POST", "/auth/login", json={"email": email, "password": password}, skip_refresh=True)

    async def logout(self) -> None:
        await self._call("Logout", "POST", "/auth/logout")

    async def check_auth_status(self) -> Dict[str, Any]:
        return await self._call("Auth status", "GET", "/auth/status")

    async def validate_invitation(self, token: str) -> Dict[str, Any]:
        return await self._call("Invitation validation", "GET", f"/auth/invitations/validate/{token}")

    async def register_admin(self, name: str, password: str, token: str) -> Dict[str, Any]:
        return await self._call(
            "Admin registration", "POST", "/auth/register-admin",
            json={"name": name, "password": password, "token": token},
            skip_refresh=True,
        )

    async def invite_admin(self, company_id: int, invited_user_email: str) -> Dict[str, Any]:
        return await self._call(
            "Invitation", "POST", "/admin/invite",
            json={"company_id": company_id, "invited_user_email": invited_user_email},
        )
