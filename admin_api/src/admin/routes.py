from fastapi import APIRouter, Body, Depends, Query, Request
from typing import Optional, Dict, Any

from .controller import AdminController

router = APIRouter(prefix="/admins", tags=["Admins"])


def get_admin_controller(request: Request) -> AdminController:
	state = request.app.state
	return AdminController(state.admin_store, state.password_hasher, state.settings)


def get_current_admin(request: Request) -> Optional[Dict[str, Any]]:
	# Populated by JWTAuthMiddleware; absent when the request was not authenticated
	return getattr(request.state, "admin", None)


@router.get("")
async def list_admins(
	page: Optional[str] = Query(None, description="Page number, starting at 1"),
	items: Optional[str] = Query(None, description="Items per page"),
	controller: AdminController = Depends(get_admin_controller),
):
	return await controller.list(page, items)


# /me and /search are declared before /{admin_id} so they are not taken for ids
@router.get("/me")
async def get_profile(
	current_admin: Optional[Dict[str, Any]] = Depends(get_current_admin),
	controller: AdminController = Depends(get_admin_controller),
):
	return await controller.profile(current_admin)


@router.get("/search")
async def search_admins(
	q: Optional[str] = Query(None, description="Text to look for"),
	fields: Optional[str] = Query(None, description="Comma separated fields to search, e.g. name,surname"),
	controller: AdminController = Depends(get_admin_controller),
):
	return await controller.search(q, fields)


@router.get("/{admin_id}")
async def read_admin(
	admin_id: str,
	controller: AdminController = Depends(get_admin_controller),
):
	return await controller.read(admin_id)


@router.post("")
async def create_admin(
	body: Optional[Dict[str, Any]] = Body(None),
	controller: AdminController = Depends(get_admin_controller),
):
	return await controller.create(body or {})


@router.put("/{admin_id}")
async def update_admin(
	admin_id: str,
	body: Optional[Dict[str, Any]] = Body(None),
	controller: AdminController = Depends(get_admin_controller),
):
	return await controller.update(admin_id, body or {})


@router.put("/{admin_id}/password")
async def update_admin_password(
	admin_id: str,
	body: Optional[Dict[str, Any]] = Body(None),
	controller: AdminController = Depends(get_admin_controller),
):
	return await controller.update_password(admin_id, body or {})


@router.delete("/{admin_id}")
async def delete_admin(
	admin_id: str,
	controller: AdminController = Depends(get_admin_controller),
):
	return await controller.delete(admin_id)
