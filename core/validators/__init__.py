"""Input validators for user data."""

from .cpf import is_valid_cpf, normalize_cpf

__all__ = ["is_valid_cpf", "normalize_cpf"]
