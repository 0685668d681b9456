# app/routes/auth.py

"""
Authentication Routes.

Admin login and registration. Both issue a 24 hour HS256 bearer token that
carries the user's id, email and role. The ``auth`` rate limit bucket is the
tightest in the table to slow down credential stuffing.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.dependencies import AuthServiceDep, rate_limit
from app.schemas import LoginRequest, RegisterRequest, envelope

router = APIRouter(
    prefix="/api/auth",
    tags=["🔐 Auth"],
    dependencies=[Depends(rate_limit("auth"))],
)


@router.post(
    "/login",
    response_class=ORJSONResponse,
    summary="Admin login",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "user": {"id": 1, "email": "admin@example.com"},
                        },
                        "message": "Login successful",
                    },
                },
            },
        },
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {"example": {"success": False, "error": "Invalid credentials"}},
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {
                "application/json": {"example": {"success": False, "error": "Rate limit exceeded"}},
            },
        },
    },
    operation_id="auth_login",
)
async def login(
    credentials: Annotated[LoginRequest, Body()],
    auth_service: AuthServiceDep,
) -> dict[str, Any]:
    """
    Exchange email and password for a bearer token.

    Parameters
    ----------
    credentials : LoginRequest
        Email and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    dict[str, Any]
        Envelope with the token and the user's id and email.

    Raises
    ------
    InvalidCredentialsError
        Unknown email or wrong password.
    """
    data = await auth_service.login(credentials)
    return envelope(data=data, message="Login successful")


@router.post(
    "/register",
    response_class=ORJSONResponse,
    status_code=HTTP_201_CREATED,
    summary="Admin registration",
    responses={
        409: {
            "description": "Conflict",
            "content": {
                "application/json": {"example": {"success": False, "error": "User already exists"}},
            },
        },
    },
    operation_id="auth_register",
)
async def register(
    payload: Annotated[RegisterRequest, Body()],
    auth_service: AuthServiceDep,
) -> dict[str, Any]:
    """
    Register a user and return a token plus the new API key.

    Raises
    ------
    UserAlreadyExistsError
        The email is already registered.
    """
    data = await auth_service.register(payload)
    return envelope(data=data, message="Registration successful")
