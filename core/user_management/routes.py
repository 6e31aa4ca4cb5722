"""
User Management API Routes

Each route is a self-contained transaction: it runs one service operation and
catches every exception at its own boundary, answering with ``{"message"}``.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from config import Settings
from core.database.gateway import DataStoreGateway
from core.exceptions import UserServiceError
from dependencies import get_config, get_gateway
from .models import (
    AuthRequest, UserCreate, UserUpdate,
    AuthResponse, MessageResponse, UserCreatedResponse, UserDeletedResponse,
)
from .service import UserService, MSG_CREATED, MSG_UPDATED, MSG_DELETED

logger = logging.getLogger(__name__)

user_router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={
        400: {"model": MessageResponse, "description": "Missing or invalid fields"},
        500: {"model": MessageResponse, "description": "Store or hashing failure"},
    },
)


def _error_response(exc: Exception, failure_message: str, settings: Settings) -> JSONResponse:
    """Translate an exception raised inside a route into its JSON response."""
    if isinstance(exc, UserServiceError) and exc.status_code < 500:
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    logger.error(f"{failure_message} {exc}", exc_info=True)
    content: Dict[str, Any] = {"message": failure_message}
    if settings.expose_error_details:
        content["error"] = getattr(exc, "detail", None) or str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


@user_router.post("/auth", response_model=AuthResponse)
async def authenticate(
    credentials: AuthRequest,
    gateway: DataStoreGateway = Depends(get_gateway),
    settings: Settings = Depends(get_config),
):
    """Exchange email and password for a one-hour session token."""
    try:
        return await UserService.authenticate(gateway, credentials)
    except Exception as exc:
        return _error_response(exc, "Um erro ocorreu durante a autenticação.", settings)


@user_router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    gateway: DataStoreGateway = Depends(get_gateway),
    settings: Settings = Depends(get_config),
):
    """Register a new user."""
    try:
        user_id = await UserService.create_user(gateway, user_data)
        return {"message": MSG_CREATED, "user": {"id": user_id}}
    except Exception as exc:
        return _error_response(exc, "Um erro ocorreu durante o cadastro do usuário.", settings)


@user_router.put("/{user_id}", response_model=MessageResponse)
async def update_user(
    user_id: str,
    user_update: UserUpdate,
    gateway: DataStoreGateway = Depends(get_gateway),
    settings: Settings = Depends(get_config),
):
    """Update user information. Email and CPF are not changeable."""
    try:
        await UserService.update_user(gateway, user_id, user_update)
        return {"message": MSG_UPDATED}
    except Exception as exc:
        return _error_response(exc, "Um erro ocorreu durante a atualização do usuário.", settings)


@user_router.get("")
async def list_users(
    gateway: DataStoreGateway = Depends(get_gateway),
    settings: Settings = Depends(get_config),
):
    """Get list of all users."""
    try:
        return await UserService.list_users(gateway)
    except Exception as exc:
        return _error_response(exc, "Erro ao buscar usuários no banco de dados.", settings)


@user_router.get("/{user_id}")
async def get_user(
    user_id: str,
    gateway: DataStoreGateway = Depends(get_gateway),
    settings: Settings = Depends(get_config),
):
    """Get specific user by ID."""
    try:
        return await UserService.get_user(gateway, user_id)
    except Exception as exc:
        return _error_response(exc, "Erro ao recuperar dados do usuário", settings)


@user_router.delete("/{user_id}", response_model=UserDeletedResponse)
async def delete_user(
    user_id: str,
    gateway: DataStoreGateway = Depends(get_gateway),
    settings: Settings = Depends(get_config),
):
    """Permanently delete a user, returning the deleted record."""
    try:
        user = await UserService.delete_user(gateway, user_id)
        return {"message": MSG_DELETED, "user": user}
    except Exception as exc:
        return _error_response(exc, "Erro ao deletar usuário.", settings)
