import typing as t

DEFAULT_MIN_LENGTH = 8
DEFAULT_MAX_BYTES = 72


class PasswordPolicy:
    """Static password strength rules.

    `validate` only answers yes/no: callers never learn which rule failed.
    Use `describe` to tell a user what a valid password looks like.
    """

    def __init__(
        self,
        *,
        min_length: int = DEFAULT_MIN_LENGTH,
        max_bytes: int = DEFAULT_MAX_BYTES,
        require_lower: bool = True,
        require_upper: bool = True,
        require_digit: bool = True,
        require_special: bool = True,
    ):
        self.min_length = min_length
        self.max_bytes = max_bytes
        self.require_lower = require_lower
        self.require_upper = require_upper
        self.require_digit = require_digit
        self.require_special = require_special

    def validate(self, password: t.Optional[str]) -> bool:
        if not isinstance(password, str) or not password:
            return False

        try:
            size = len(password.encode("utf-8"))
        except UnicodeEncodeError: #lone surrogates can not be hashed either
            return False

        checks = [
            len(password) >= self.min_length,
            size <= self.max_bytes,
            not self.require_lower or any(c.islower() for c in password),
            not self.require_upper or any(c.isupper() for c in password),
            not self.require_digit or any(c.isdigit() for c in password),
            not self.require_special or any(not c.isalnum() and not c.isspace() for c in password),
        ]
        return all(checks)

    def describe(self) -> str:
        classes = []
        if self.require_lower:
            classes.append("a lower-case letter")
        if self.require_upper:
            classes.append("an upper-case letter")
        if self.require_digit:
            classes.append("a digit")
        if self.require_special:
            classes.append("a special character")

        text = f"Password must be at least {self.min_length} characters and at most {self.max_bytes} bytes long"
        if classes:
            text += " and contain " + ", ".join(classes)
        return text + "."
