"""Account roles."""

from enum import StrEnum


class Role(StrEnum):
    """Role attached to every account, drives capability grants."""

    STUDENT = "student"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"
