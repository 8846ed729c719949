"""Syntactic rules for candidate usernames and passwords.

Every rule is evaluated on its own, so callers always receive the complete
ordered list of violations for one input instead of only the first one.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

USERNAME_MIN_LENGTH: Final = 6
USERNAME_MAX_LENGTH: Final = 32
PASSWORD_MIN_LENGTH: Final = 8
PASSWORD_MAX_LENGTH: Final = 32

PASSWORD_SPECIAL_CHARACTERS: Final = "!@#$%^&*()_+|~-=`{}[]:\";'<>?,./"

_USERNAME_PATTERN: Final = re.compile(r"[A-Za-z0-9._\-@]+")


@dataclass(frozen=True)
class FieldError:
    """One rule violation attached to a request field."""

    param: str
    message: str


@dataclass(frozen=True)
class CredentialRule:
    """Predicate that must hold for a value, and the error reported otherwise."""

    is_satisfied: Callable[[str], bool]
    error: FieldError


def _has_any(characters: str) -> Callable[[str], bool]:
    allowed = frozenset(characters)
    return lambda value: any(char in allowed for char in value)


def _username_rule(is_satisfied: Callable[[str], bool], message: str) -> CredentialRule:
    return CredentialRule(is_satisfied=is_satisfied, error=FieldError("username", message))


def _password_rule(is_satisfied: Callable[[str], bool], message: str) -> CredentialRule:
    return CredentialRule(is_satisfied=is_satisfied, error=FieldError("password", message))


USERNAME_RULES: Final[tuple[CredentialRule, ...]] = (
    _username_rule(
        lambda value: len(value) >= USERNAME_MIN_LENGTH,
        f"Username must be at least {USERNAME_MIN_LENGTH} characters long",
    ),
    _username_rule(
        lambda value: len(value) <= USERNAME_MAX_LENGTH,
        f"Username must be less than {USERNAME_MAX_LENGTH} characters long",
    ),
    _username_rule(
        lambda value: _USERNAME_PATTERN.fullmatch(value) is not None,
        "Username must contain only alphanumeric characters and special characters .-_@",
    ),
)

PASSWORD_RULES: Final[tuple[CredentialRule, ...]] = (
    _password_rule(
        lambda value: len(value) >= PASSWORD_MIN_LENGTH,
        f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
    ),
    _password_rule(
        lambda value: len(value) <= PASSWORD_MAX_LENGTH,
        f"Password must be less than {PASSWORD_MAX_LENGTH} characters long",
    ),
    _password_rule(
        _has_any("ABCDEFGHIJKLMNOPQRSTUVWXYZ"),
        "Password must contain at least one uppercase letter",
    ),
    _password_rule(
        _has_any("abcdefghijklmnopqrstuvwxyz"),
        "Password must contain at least one lowercase letter",
    ),
    _password_rule(_has_any("0123456789"), "Password must contain at least one number"),
    _password_rule(
        _has_any(PASSWORD_SPECIAL_CHARACTERS),
        "Password must contain at least one special character",
    ),
)


def collect_violations(value: str, rules: tuple[CredentialRule, ...]) -> list[FieldError]:
    """Return the error of every rule the value fails, in rule order."""

    return [rule.error for rule in rules if not rule.is_satisfied(value)]


def validate_username(username: str) -> list[FieldError]:
    """Return all username rule violations; empty when the username conforms."""

    return collect_violations(username, USERNAME_RULES)


def validate_password(password: str) -> list[FieldError]:
    """Return all password rule violations; empty when the password conforms."""

    return collect_violations(password, PASSWORD_RULES)
