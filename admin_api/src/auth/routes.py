# admin_api/src/auth/routes.py
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from ...utils.helperFunctions import api_response
from ..admin.errors import envelope_errors
from ..admin.schema import profile_of
from .controller import AuthController
from .schema import LoginRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_controller(request: Request) -> AuthController:
    state = request.app.state
    return AuthController(state.admin_store, state.password_hasher, state.jwt_auth)


@router.post("/login")
@envelope_errors("Error logging in")
async def login(
    body: LoginRequest,
    request: Request,
    controller: AuthController = Depends(get_auth_controller),
) -> JSONResponse:
    """Login with JWT cookie authentication"""
    admin, token = await controller.login(body)

    result = profile_of(admin)
    result["token"] = token
    response = api_response(status.HTTP_200_OK, True, result, "Successfully login admin")
    request.app.state.jwt_auth.set_auth_cookie(response, token)
    return response


@router.post("/logout")
async def logout(request: Request) -> JSONResponse:
    """Clear the access token cookie"""
    response = api_response(status.HTTP_200_OK, True, None, "Successfully logout")
    request.app.state.jwt_auth.clear_auth_cookie(response)
    return response
