import logging
from typing import Any, Dict, Tuple

from fastapi import status

from ..admin.errors import AdminAPIError, ValidationError
from ..admin.store import AdminStore
from .schema import LoginRequest

logger = logging.getLogger(__name__)


class AuthenticationError(AdminAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED


class AccountDisabledError(AdminAPIError):
    status_code = status.HTTP_403_FORBIDDEN


class AuthController:
    """Credential checks for admin login"""

    def __init__(self, store: AdminStore, hasher, jwt_auth):
        self.store = store
        self.hasher = hasher
        self.jwt_auth = jwt_auth

    async def login(self, request: LoginRequest) -> Tuple[Dict[str, Any], str]:
        """Authenticate an admin and return (admin, access token)"""
        if not request.email or not request.password:
            raise ValidationError("Email or password fields are missing.")

        admin = await self.store.find_by_email(request.email, include_password=True)
        if not admin or admin.get("removed"):
            logger.info("Login refused for unknown or removed admin %s", request.email)
            raise AuthenticationError("Incorrect email or password")

        if not self.hasher.verify(request.password, admin.get("password", "")):
            logger.info("Login refused for %s: wrong password", request.email)
            raise AuthenticationError("Incorrect email or password")

        if not admin.get("enabled", True):
            raise AccountDisabledError("Your account is disabled, contact your account administrator")

        admin.pop("password", None)
        token = self.jwt_auth.create_access_token(str(admin["_id"]), admin["email"])
        logger.info("Admin %s logged in", admin["_id"])
        return admin, token
