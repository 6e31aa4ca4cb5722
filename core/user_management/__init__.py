"""
User Management Module

Registration, authentication and profile CRUD for application users.
"""

from .service import UserService

__all__ = ["UserService"]
