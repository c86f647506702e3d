import logging

from bson.errors import InvalidId
from fastapi import Request, HTTPException, status
from starlette.middleware.base import BaseHTTPMiddleware

from ..utils.helperFunctions import api_response

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(BaseHTTPMiddleware):
    """Authenticate admins and attach the current admin to ``request.state.admin``"""

    def __init__(self, app):
        super().__init__(app)

        # Routes that don't require authentication (use prefix matching)
        self.public_routes = {
            "/",
            "/health",
            "/docs",
            "/redoc",
            "/openapi.json",
            "/auth/login",
        }

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return await call_next(request)

        path = request.url.path
        if any(path == route or (route != "/" and path.startswith(route + "/")) for route in self.public_routes):
            return await call_next(request)

        jwt_auth = request.app.state.jwt_auth
        store = request.app.state.admin_store

        access_token = jwt_auth.get_token(request)
        if not access_token:
            return api_response(status.HTTP_401_UNAUTHORIZED, False, None, "Authentication required")

        try:
            claims = jwt_auth.verify_access_token(access_token)
        except HTTPException as e:
            logger.info("Rejected token on %s: %s", path, e.detail)
            return api_response(e.status_code, False, None, e.detail)

        try:
            admin = await store.find_by_id(claims["sub"])
        except InvalidId:
            admin = None
        except Exception as e:
            logger.exception("Admin lookup failed during authentication")
            return api_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, False, None, f"Internal server error: {str(e)}"
            )

        if not admin or admin.get("removed"):
            logger.warning("Token for missing or removed admin %s", claims["sub"])
            return api_response(
                status.HTTP_401_UNAUTHORIZED, False, None, "Admin doesn't exist, authorization denied."
            )

        request.state.admin = admin
        return await call_next(request)
