"""
Exception hierarchy for token replacements.

Registration and configuration problems are raised to the code that caused
them. Problems with a single token occurrence are never raised out of a
substitution pass; they are reported as diagnostics instead.
"""


class TokenError(Exception):
    """Base class for all token replacement errors."""


class InvalidConfiguration(TokenError):
    """Delimiters are empty, too long or ambiguous."""


class RegistrationError(TokenError):
    """A token could not be registered."""


class InvalidTokenName(RegistrationError):
    """Token name does not match the identifier pattern."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid token name: {name!r}")
        self.name: str = name


class InvalidCallback(RegistrationError):
    """Callback is not invocable as (name, params, context)."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Invalid callback for token {name!r}: {reason}")
        self.name: str = name
        self.reason: str = reason


class DuplicateToken(RegistrationError):
    """Token name is already registered and replacement was not requested."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Token already registered: {name!r}")
        self.name: str = name


class UnknownToken(TokenError, KeyError):
    """No token is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown token: {name!r}")
        self.name: str = name

    def __str__(self) -> str:
        return str(self.args[0])


class CallbackFailure(TokenError):
    """Raised by a token callback to signal that it cannot produce a value."""
