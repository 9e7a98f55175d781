from hrportal.client.api_client import ApiClient
from hrportal.client.auth_service import AuthService, AuthServiceError
from hrportal.client.errors import ApiError, RefreshExchangeError

__all__ = ["ApiClient", "AuthService", "AuthServiceError", "ApiError", "RefreshExchangeError"]
