from pydantic import BaseModel, validator
from typing import Optional


class LoginRequest(BaseModel):
    # Both optional so a missing field is answered with the 400 envelope, not a 422
    email: Optional[str] = None
    password: Optional[str] = None

    @validator("email")
    def strip_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip().lower()
