"""
Pydantic schemas for the admin collection.

Request bodies reach the controller as plain dicts so it can apply its own
validation order and answer in the response envelope. ``AdminDocument`` is the
document schema a new admin is persisted through: unknown keys are dropped,
so clients cannot set ``_id``, ``removed`` or ``createdAt`` themselves.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, validator


# Fields exposed by profile/create responses
PROFILE_FIELDS = ("_id", "enabled", "email", "name", "surname")


def normalize_email(v: str) -> str:
	return v.strip().lower()


class AdminDocument(BaseModel):
	email: str
	password: str
	name: Optional[str] = None
	surname: Optional[str] = None
	photo: Optional[str] = None
	role: str = "admin"
	enabled: bool = True
	removed: bool = False
	createdAt: datetime = Field(default_factory=datetime.utcnow)

	class Config:
		extra = "ignore"

	@validator("email")
	def normalize_email_field(cls, v: str) -> str:
		return normalize_email(v)

	@classmethod
	def from_body(cls, body: Dict[str, Any], password_hash: str) -> "AdminDocument":
		data = {k: v for k, v in body.items() if k not in ("removed", "createdAt", "_id")}
		# null role/enabled means "use the default"
		for key in ("role", "enabled"):
			if data.get(key, "") is None:
				del data[key]
		data["password"] = password_hash
		return cls(**data)


def profile_of(admin: Dict[str, Any]) -> Dict[str, Any]:
	return {field: admin.get(field) for field in PROFILE_FIELDS}
