from fastapi import Response, Request, HTTPException, status
from typing import Any, Dict, Optional
from datetime import datetime, timedelta
import uuid
from jose import jwt, JWTError


class JWTAuthController:
    """JWT access tokens for admins, carried in an httpOnly cookie or a Bearer header"""

    def __init__(self, settings):
        # JWT settings from config
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.access_token_expire_minutes = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES

        # Cookie settings from config
        self.access_token_cookie = settings.JWT_ACCESS_TOKEN_COOKIE_NAME
        self.secure_cookie = settings.COOKIE_SECURE
        self.cookie_domain = settings.COOKIE_DOMAIN
        self.cookie_samesite = settings.COOKIE_SAMESITE

    def create_access_token(self, admin_id: str, email: str) -> str:
        """Create a JWT access token with minimal payload"""
        now = datetime.utcnow()
        claims = {
            "sub": admin_id,  # Subject (admin _id)
            "email": email,
            "jti": str(uuid.uuid4()),  # JWT ID
            "iat": now,
            "exp": now + timedelta(minutes=self.access_token_expire_minutes),
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify_access_token(self, token: str) -> Dict[str, Any]:
        """Verify signature and expiration, returning the token claims"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"Invalid token: {str(e)}"
            )

        if not payload.get("sub"):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token: missing subject"
            )
        return payload

    def get_token(self, request: Request) -> Optional[str]:
        """Read the access token from the cookie, falling back to the Authorization header"""
        access_token = request.cookies.get(self.access_token_cookie)

        if not access_token and "Authorization" in request.headers:
            auth_header = request.headers["Authorization"]
            if auth_header.startswith("Bearer "):
                access_token = auth_header.replace("Bearer ", "", 1)

        return access_token

    def set_auth_cookie(self, response: Response, access_token: str) -> None:
        """Set the short lived, httpOnly access token cookie"""
        response.set_cookie(
            key=self.access_token_cookie,
            value=access_token,
            httponly=True,
            secure=self.secure_cookie,
            samesite=self.cookie_samesite,
            domain=self.cookie_domain,
            max_age=self.access_token_expire_minutes * 60,
            path="/"
        )

    def clear_auth_cookie(self, response: Response) -> None:
        response.delete_cookie(
            key=self.access_token_cookie,
            path="/",
            domain=self.cookie_domain,
            secure=self.secure_cookie,
            httponly=True
        )
