"""Client-side checks for the registration form."""

from __future__ import annotations

import re

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_USERNAME = re.compile(r"^[a-zA-Z0-9_]{3,20}$")
# 8+ characters with at least one lower case letter, upper case letter and digit.
_PASSWORD = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)[a-zA-Z\d@$!%*?&]{8,}$")


def registration_errors(username: str, email: str, password: str) -> list[str]:
    errors: list[str] = []
    if not _USERNAME.match(username):
        errors.append("Username must be 3-20 letters, digits or underscores.")
    if not _EMAIL.match(email):
        errors.append("Enter a valid email address.")
    if not _PASSWORD.match(password):
        errors.append("Password needs 8+ characters with upper case, lower case and a digit.")
    return errors
