"""Core packages of the user service."""
