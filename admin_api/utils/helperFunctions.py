# admin_api/utils/helperFunctions.py
import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def serialize_document(data: Any) -> Any:
    """Make Mongo documents JSON-safe (ObjectId -> str, datetime -> ISO string)"""
    return jsonable_encoder(data, custom_encoder={ObjectId: str})


def api_response(status_code: int, success: bool, result: Any, message: str,
                 pagination: Optional[Dict[str, Any]] = None) -> JSONResponse:
    """Build the response envelope every admin endpoint answers with"""
    content: Dict[str, Any] = {"success": success, "result": serialize_document(result)}
    if pagination is not None:
        content["pagination"] = pagination
    content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


# -----------------------------------------
# Admin bootstrap helper
# -----------------------------------------

async def ensure_default_admin(store, hasher, settings) -> Optional[Dict[str, Any]]:
    """Create the first admin account if the collection is empty.

    Credentials come from ``DEFAULT_ADMIN_EMAIL`` / ``DEFAULT_ADMIN_PASSWORD``
    and are stored only in MongoDB, with the password hashed. Later runs skip
    creation as soon as any admin exists, so changing the environment
    afterwards has no effect on existing accounts.
    """
    from ..src.admin.schema import AdminDocument

    email = settings.DEFAULT_ADMIN_EMAIL
    password = settings.DEFAULT_ADMIN_PASSWORD
    if not email or not password:
        return None

    if await store.count() > 0:
        logger.info("Admins already present, skipping default admin bootstrap")
        return None

    document = AdminDocument.from_body(
        {"email": email, "name": "Default", "surname": "Admin"},
        hasher.hash(password),
    )
    admin = await store.insert(document.model_dump())
    logger.info("Default admin %s created", admin["email"])
    return admin
