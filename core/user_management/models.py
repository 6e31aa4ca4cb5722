"""
User Management Pydantic Models

Request and response models for the user endpoints. Request fields are all
optional at the schema level so that a missing field is reported by the
service with its own 400 message rather than a framework validation error.
"""

from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class _RequestModel(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    def missing_fields(self, names: List[str]) -> List[str]:
        """Return the names among ``names`` whose value is absent or empty."""
        return [name for name in names if not getattr(self, name)]


class AuthRequest(_RequestModel):
    """Credentials posted to the authentication endpoint."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserCreate(_RequestModel):
    """Model for creating a new user."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    cpf: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    neighborhood: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    phone: Optional[str] = None
    birthdate: Optional[str] = None

    REQUIRED: ClassVar[List[str]] = [
        "name", "email", "password", "cpf", "state", "city",
        "neighborhood", "street", "number", "phone", "birthdate",
    ]


class UserUpdate(_RequestModel):
    """
    Model for updating user data.

    ``email`` and ``cpf`` cannot be changed. ``password`` is optional: when
    omitted the stored digest is kept.
    """
    name: Optional[str] = None
    password: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    neighborhood: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    phone: Optional[str] = None
    birthdate: Optional[str] = None

    REQUIRED: ClassVar[List[str]] = [
        "name", "state", "city", "neighborhood", "street",
        "number", "phone", "birthdate",
    ]


class MessageResponse(BaseModel):
    message: str


class CreatedUser(BaseModel):
    id: str


class UserCreatedResponse(MessageResponse):
    user: CreatedUser


class AuthResponse(BaseModel):
    token: str
    user: Dict[str, Any]


class UserDeletedResponse(MessageResponse):
    user: Dict[str, Any]
