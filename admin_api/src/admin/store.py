import asyncio
import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

logger = logging.getLogger(__name__)

# Projection applied to every read: the password hash never leaves the store.
WITHOUT_PASSWORD = {"password": 0}


def build_search_filter(query: str, fields: Iterable[str]) -> Dict[str, Any]:
	"""OR together one case-insensitive substring match per field.

	The query is escaped, so it is always matched literally.
	"""
	pattern = re.escape(query)
	return {"$or": [{field: {"$regex": pattern, "$options": "i"}} for field in fields]}


class AdminStore:
	"""Admin collection access.

	pymongo is blocking, so each call runs in a worker thread and the caller
	awaits it. Malformed ids surface as ``bson.errors.InvalidId``.
	"""

	def __init__(self, collection: Collection):
		self.collection = collection

	async def find_page(self, skip: int, limit: int) -> List[Dict[str, Any]]:
		def _run():
			cursor = (
				self.collection.find({}, WITHOUT_PASSWORD)
				.sort("createdAt", DESCENDING)
				.skip(skip)
				.limit(limit)
			)
			return list(cursor)
		return await asyncio.to_thread(_run)

	async def count(self) -> int:
		return await asyncio.to_thread(self.collection.count_documents, {})

	async def find_by_id(self, admin_id: str) -> Optional[Dict[str, Any]]:
		oid = ObjectId(admin_id)
		return await asyncio.to_thread(self.collection.find_one, {"_id": oid}, WITHOUT_PASSWORD)

	async def find_by_email(self, email: str, include_password: bool = False) -> Optional[Dict[str, Any]]:
		projection = None if include_password else WITHOUT_PASSWORD
		return await asyncio.to_thread(self.collection.find_one, {"email": email}, projection)

	async def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
		doc = dict(document)
		result = await asyncio.to_thread(self.collection.insert_one, doc)
		doc["_id"] = result.inserted_id
		logger.info("Inserted admin %s", result.inserted_id)
		return doc

	async def update_by_id(self, admin_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
		"""$set ``fields`` on one admin and return the document after the update."""
		oid = ObjectId(admin_id)
		if not fields:
			# an empty $set is rejected by the server; nothing to change
			return await asyncio.to_thread(self.collection.find_one, {"_id": oid}, WITHOUT_PASSWORD)
		return await asyncio.to_thread(
			self.collection.find_one_and_update,
			{"_id": oid},
			{"$set": fields},
			projection=WITHOUT_PASSWORD,
			return_document=ReturnDocument.AFTER,
		)

	async def search(self, filt: Dict[str, Any], limit: int) -> List[Dict[str, Any]]:
		def _run():
			return list(self.collection.find(filt, WITHOUT_PASSWORD).limit(limit))
		return await asyncio.to_thread(_run)
