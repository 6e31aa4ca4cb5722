"""
User Management Service Layer

Business logic for the user endpoints. Every statement goes through the
``DataStoreGateway`` with positional parameters. Failures are raised as
``UserServiceError`` subclasses and translated to responses by the routes.
"""

import logging
import re
from typing import Any, Dict, List

from core.auth.security import hash_password_async, verify_password_async, issue_user_token
from core.database.gateway import DataStoreGateway
from core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from core.validators import is_valid_cpf, normalize_cpf
from .models import AuthRequest, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

# Ids are 64-bit integers written in ASCII digits
_USER_ID = re.compile(r"[0-9]{1,18}")

MSG_AUTH_MISSING = "Preencha ambos os campos."
MSG_INVALID_CREDENTIALS = "E-mail ou senha inválidos."
MSG_CREATE_MISSING = (
    "Preencha todos os campos (name, email, password, cpf, state, city, "
    "neighborhood, street, number, phone, birthdate)."
)
MSG_UPDATE_MISSING = (
    "Preencha todos os campos obrigatórios (name, state, city, "
    "neighborhood, street, number, phone, birthdate)."
)
MSG_INVALID_CPF = "O CPF inserido é inválido."
MSG_DUPLICATE = "E-mail ou CPF já cadastrados."
MSG_CREATED = "Usuário cadastrado com sucesso."
MSG_UPDATED = "Usuário atualizado com sucesso."
MSG_DELETED = "Usuário deletado com sucesso!"


def not_found_message(user_id: Any) -> str:
    return f"O usuário de ID {user_id} não foi encontrado no banco de dados."


class UserService:
    """Service class for user management operations."""

    @staticmethod
    async def authenticate(gateway: DataStoreGateway, credentials: AuthRequest) -> Dict[str, Any]:
        """
        Check email/password and issue a session token.

        Unknown email and wrong password raise the same ``AuthError`` so the
        response does not reveal which one failed.

        Returns:
            ``{"token": ..., "user": <stored row>}``
        """
        if credentials.missing_fields(["email", "password"]):
            raise ValidationError(MSG_AUTH_MISSING)

        result = await gateway.execute('SELECT * FROM "user" WHERE email = ?', [credentials.email])
        if not result.rows:
            logger.info("Authentication failed: unknown email")
            raise AuthError(MSG_INVALID_CREDENTIALS)

        user = result.rows[0]
        if not await verify_password_async(credentials.password, user["password"]):
            logger.info(f"Authentication failed: wrong password for user {user['id']}")
            raise AuthError(MSG_INVALID_CREDENTIALS)

        token = issue_user_token(user["id"], user["email"])
        logger.info(f"User {user['id']} authenticated successfully")
        return {"token": token, "user": user}

    @staticmethod
    async def create_user(gateway: DataStoreGateway, user_data: UserCreate) -> str:
        """
        Register a new user.

        The email/CPF lookup only short-circuits the common case; the unique
        constraints on the table decide, and a violation on insert is reported
        as the same conflict.

        Returns:
            The new user id as a string
        """
        if user_data.missing_fields(UserCreate.REQUIRED):
            raise ValidationError(MSG_CREATE_MISSING)

        if not is_valid_cpf(user_data.cpf):
            raise ValidationError(MSG_INVALID_CPF)

        cpf = normalize_cpf(user_data.cpf)

        existing = await gateway.execute(
            'SELECT id FROM "user" WHERE email = ? OR cpf = ?',
            [user_data.email, cpf],
        )
        if existing.rows:
            raise ConflictError(MSG_DUPLICATE)

        hashed_password = await hash_password_async(user_data.password)

        try:
            result = await gateway.execute(
                'INSERT INTO "user" (name, email, password, cpf, state, city, neighborhood, '
                "street, number, phone, birthdate) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?) RETURNING id",
                [
                    user_data.name,
                    user_data.email,
                    hashed_password,
                    cpf,
                    user_data.state,
                    user_data.city,
                    user_data.neighborhood,
                    user_data.street,
                    user_data.number,
                    user_data.phone,
                    user_data.birthdate,
                ],
            )
        except ConflictError as exc:
            raise ConflictError(MSG_DUPLICATE, detail=exc.detail) from exc

        user_id = str(result.last_insert_id)
        logger.info(f"Created user {user_id}")
        return user_id

    @staticmethod
    async def update_user(gateway: DataStoreGateway, user_id: str, user_update: UserUpdate) -> None:
        """Replace the mutable profile fields; re-hash only when a new password is sent."""
        if user_update.missing_fields(UserUpdate.REQUIRED):
            raise ValidationError(MSG_UPDATE_MISSING)

        user = await UserService.get_user(gateway, user_id)

        if user_update.password:
            hashed_password = await hash_password_async(user_update.password)
        else:
            hashed_password = user["password"]

        await gateway.execute(
            'UPDATE "user" SET name = ?, password = ?, state = ?, city = ?, neighborhood = ?, '
            "street = ?, number = ?, phone = ?, birthdate = ? WHERE id = ?",
            [
                user_update.name,
                hashed_password,
                user_update.state,
                user_update.city,
                user_update.neighborhood,
                user_update.street,
                user_update.number,
                user_update.phone,
                user_update.birthdate,
                user["id"],
            ],
        )
        logger.info(f"Updated user {user['id']}")

    @staticmethod
    async def list_users(gateway: DataStoreGateway) -> List[Dict[str, Any]]:
        """Get every stored user."""
        result = await gateway.execute('SELECT * FROM "user" ORDER BY id')
        return result.rows

    @staticmethod
    async def get_user(gateway: DataStoreGateway, user_id: str) -> Dict[str, Any]:
        """
        Get user by ID.

        Raises:
            NotFoundError: no row has this id (non-numeric ids never match)
        """
        if not _USER_ID.fullmatch(str(user_id)):
            raise NotFoundError(not_found_message(user_id))

        result = await gateway.execute('SELECT * FROM "user" WHERE id = ?', [int(user_id)])
        if not result.rows:
            raise NotFoundError(not_found_message(user_id))
        return result.rows[0]

    @staticmethod
    async def delete_user(gateway: DataStoreGateway, user_id: str) -> Dict[str, Any]:
        """Permanently delete a user and return the row as it was before deletion."""
        user = await UserService.get_user(gateway, user_id)

        await gateway.execute('DELETE FROM "user" WHERE id = ?', [user["id"]])
        logger.info(f"Deleted user {user['id']}")
        return user
