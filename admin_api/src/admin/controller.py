import asyncio
import logging
import math
import re
from typing import Any, Dict, List, Optional

from fastapi import status

from ...utils.helperFunctions import api_response
from .errors import EmptyResultError, NotFoundError, ValidationError, envelope_errors
from .schema import AdminDocument, normalize_email, profile_of
from .store import AdminStore, build_search_filter

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_page(raw: Optional[str]) -> int:
	if raw is None or raw == "":
		return 1
	try:
		page = int(raw)
	except (TypeError, ValueError):
		raise ValidationError(f"Invalid page: {raw}")
	if page < 1:
		raise ValidationError(f"Invalid page: {raw}")
	return page


def _parse_items(raw: Optional[str], default: int) -> int:
	# Leading digits count ("5abc" -> 5); no positive number means the default size
	match = _LEADING_INT.match(raw or "")
	if not match:
		return default
	items = int(match.group(1))
	return items if items > 0 else default


class AdminController:
	"""Request handlers for the admin collection.

	Every handler answers with ``{success, result, pagination?, message}`` and
	never lets an exception escape; see ``envelope_errors``.
	"""

	def __init__(self, store: AdminStore, hasher, settings):
		self.store = store
		self.hasher = hasher
		self.min_password_length = settings.MIN_PASSWORD_LENGTH
		self.default_page_size = settings.DEFAULT_PAGE_SIZE
		self.search_limit = settings.SEARCH_LIMIT
		self.searchable_fields = settings.searchable_fields

	@envelope_errors("Oops, there was an error", error_result=[])
	async def list(self, page: Optional[str] = None, items: Optional[str] = None):
		page_number = _parse_page(page)
		limit = _parse_items(items, self.default_page_size)
		skip = (page_number - 1) * limit

		result, count = await asyncio.gather(
			self.store.find_page(skip, limit),
			self.store.count(),
		)
		pages = math.ceil(count / limit)
		pagination = {"page": page_number, "pages": pages, "count": count}

		if count > 0:
			return api_response(status.HTTP_200_OK, True, result, "Successfully found all documents", pagination)
		return api_response(status.HTTP_203_NON_AUTHORITATIVE_INFORMATION, False, [], "Collection is empty", pagination)

	@envelope_errors("Oops, there was an error")
	async def profile(self, current_admin: Optional[Dict[str, Any]]):
		if not current_admin:
			raise NotFoundError("Couldn't find admin profile.")
		return api_response(status.HTTP_200_OK, True, profile_of(current_admin), "Successfully found profile")

	@envelope_errors("Oops, there was an error")
	async def read(self, admin_id: str):
		admin = await self.store.find_by_id(admin_id)
		if not admin:
			raise NotFoundError(f"No document found by this id: {admin_id}")
		return api_response(status.HTTP_200_OK, True, admin, f"Found document with id: {admin_id}")

	@envelope_errors("Error creating admin")
	async def create(self, body: Dict[str, Any]):
		email = body.get("email")
		password = body.get("password")
		if not email or not password:
			raise ValidationError("Email or password fields are missing.")
		if not isinstance(email, str) or not isinstance(password, str):
			raise ValidationError("Email and password must be strings.")

		email = normalize_email(email)
		if await self.store.find_by_email(email):
			raise ValidationError("An account with this email already exists.")

		if len(password) < self.min_password_length:
			raise ValidationError(
				f"The password must be at least {self.min_password_length} characters long."
			)

		document = AdminDocument.from_body(body, self.hasher.hash(password))
		saved = await self.store.insert(document.model_dump())
		logger.info("Admin %s created", saved["_id"])
		return api_response(status.HTTP_200_OK, True, profile_of(saved), "Admin created successfully")

	@envelope_errors("Error updating admin")
	async def update(self, admin_id: str, body: Dict[str, Any]):
		updates: Dict[str, Any] = {}
		if body.get("email") is not None:
			if not isinstance(body["email"], str):
				raise ValidationError("Email must be a string.")
			updates["email"] = normalize_email(body["email"])
		if body.get("role") is not None:
			updates["role"] = body["role"]

		if "email" in updates:
			existing = await self.store.find_by_email(updates["email"])
			if existing and str(existing["_id"]) != admin_id:
				raise ValidationError("An account with this email already exists.")

		updated = await self.store.update_by_id(admin_id, updates)
		if not updated:
			raise NotFoundError(f"No document found by this id: {admin_id}")
		return api_response(status.HTTP_200_OK, True, updated, "Admin updated successfully")

	@envelope_errors("Error updating password")
	async def update_password(self, admin_id: str, body: Dict[str, Any]):
		password = body.get("password")
		if not password:
			raise ValidationError("Password is required.")
		if not isinstance(password, str):
			raise ValidationError("Password must be a string.")
		if len(password) < self.min_password_length:
			raise ValidationError(
				f"Password needs to be at least {self.min_password_length} characters long."
			)

		updated = await self.store.update_by_id(admin_id, {"password": self.hasher.hash(password)})
		if not updated:
			raise NotFoundError(f"No admin found by id: {admin_id}")
		logger.info("Password updated for admin %s", admin_id)
		return api_response(status.HTTP_200_OK, True, updated, "Password updated successfully")

	@envelope_errors("Error deleting admin")
	async def delete(self, admin_id: str):
		removed = await self.store.update_by_id(admin_id, {"removed": True})
		if not removed:
			raise NotFoundError(f"No admin found by this id: {admin_id}")
		logger.info("Admin %s marked as removed", admin_id)
		return api_response(status.HTTP_200_OK, True, removed, "Admin marked as removed successfully")

	@envelope_errors("Error searching admins", error_result=[])
	async def search(self, q: Optional[str] = None, fields: Optional[str] = None):
		if not q:
			raise EmptyResultError("No search query provided.", status.HTTP_202_ACCEPTED)

		requested = self._search_fields(fields)
		admins = await self.store.search(build_search_filter(q, requested), self.search_limit)
		if not admins:
			raise EmptyResultError("No admins found.", status.HTTP_202_ACCEPTED)
		return api_response(status.HTTP_200_OK, True, admins, "Admins found successfully")

	def _search_fields(self, fields: Optional[str]) -> List[str]:
		requested = [f.strip() for f in (fields or "").split(",") if f.strip()]
		if not requested:
			raise ValidationError("No search fields provided.", result=[])
		rejected = [f for f in requested if f not in self.searchable_fields]
		if rejected:
			raise ValidationError(f"Cannot search by field(s): {', '.join(rejected)}", result=[])
		return requested
