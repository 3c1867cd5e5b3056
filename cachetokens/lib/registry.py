"""
Token registry for the replacement engine.

This module implements the mapping from token name to token definition:
- Registration with name and callback validation
- Duplicate rejection, with explicit opt-in replacement
- Lookup and listing for the substitution engine and for diagnostics
- Pure validity predicates usable without registering anything

Registrations are expected at startup, before requests are served. Writes
still build a new mapping under a lock and publish it in one assignment,
so a concurrent `lookup` sees either the old or the new snapshot, never a
partial entry.

Example:
    registry = TokenRegistry()
    registry.register("year", lambda name, params, context: "2026")
    registry.lookup("year")
"""

import inspect
import re
import threading
from typing import Any, Callable, Final, Iterator, List, Optional
from cachetokens.lib.errors import (
    DuplicateToken,
    InvalidCallback,
    InvalidTokenName,
    UnknownToken,
)
from cachetokens.lib.log import LOG
from cachetokens.models.dataModel import TokenCallback, TokenDefinition, TokenDiagnostic

TOKEN_NAME_PATTERN: Final[re.Pattern] = re.compile(r"[A-Za-z0-9_]+")


def name_isValid(name: str) -> bool:
    """Check a token name against the identifier pattern."""
    return isinstance(name, str) and TOKEN_NAME_PATTERN.fullmatch(name) is not None


def callback_check(callback: Any) -> Optional[str]:
    """Explain why a callback cannot serve as a token callback.

    Args:
        callback: Candidate callback

    Returns:
        None if the callback is invocable as (name, params, context),
        otherwise the reason it is not

    Note:
        Callables without an introspectable signature (some builtins)
        are accepted as long as they are callable.
    """
    if not callable(callback):
        return f"{type(callback).__name__} object is not callable"
    try:
        signature: inspect.Signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return None
    try:
        signature.bind(None, None, None)
    except TypeError:
        return f"signature {signature} does not accept (name, params, context)"
    return None


def callback_isValid(callback: Any) -> bool:
    """Check whether a callback is invocable as (name, params, context)."""
    return callback_check(callback) is None


def definition_diagnose(definition: TokenDefinition) -> TokenDiagnostic:
    """Derive the validity of a registry entry without invoking it."""
    reason: Optional[str] = callback_check(definition.callback)
    return TokenDiagnostic(
        name=definition.name,
        nameValid=name_isValid(definition.name),
        callbackValid=reason is None,
        reason=reason,
        description=definition.description,
    )


class TokenRegistry:
    def __init__(self) -> None:
        """Initialize empty token registry."""
        self._entries: dict[str, TokenDefinition] = {}
        self._lock: threading.Lock = threading.Lock()

    def register(
        self,
        name: str,
        callback: TokenCallback,
        metadata: Optional[dict[str, Any]] = None,
        replace: bool = False,
    ) -> TokenDefinition:
        """Register a callback under a token name.

        Args:
            name: Token name, letters, digits and underscores only
            callback: Invoked as callback(name, params, context)
            metadata: Optional free-form information, e.g. a description
            replace: Overwrite an existing entry instead of failing

        Returns:
            The stored TokenDefinition

        Raises:
            InvalidTokenName: If the name does not match the pattern
            InvalidCallback: If the callback has the wrong shape
            DuplicateToken: If the name is taken and replace is False
        """
        if not name_isValid(name):
            raise InvalidTokenName(name)
        reason: Optional[str] = callback_check(callback)
        if reason:
            raise InvalidCallback(name, reason)

        definition: TokenDefinition = TokenDefinition(
            name=name, callback=callback, metadata=dict(metadata or {})
        )
        with self._lock:
            if name in self._entries and not replace:
                raise DuplicateToken(name)
            entries: dict[str, TokenDefinition] = dict(self._entries)
            entries[name] = definition
            self._entries = entries
        LOG(f"Registered token '{name}'")
        return definition

    def unregister(self, name: str) -> None:
        """Remove a token.

        Raises:
            UnknownToken: If no token is registered under the name
        """
        with self._lock:
            if name not in self._entries:
                raise UnknownToken(name)
            entries: dict[str, TokenDefinition] = dict(self._entries)
            del entries[name]
            self._entries = entries

    def token(
        self,
        name: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
        replace: bool = False,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of `register`; the name defaults to the function name."""

        def decorator(callback: Callable[..., Any]) -> Callable[..., Any]:
            self.register(name or callback.__name__, callback, metadata, replace)
            return callback

        return decorator

    def lookup(self, name: str) -> Optional[TokenDefinition]:
        """Return the definition for a name, or None if there is none."""
        return self._entries.get(name)

    def __getitem__(self, name: str) -> TokenDefinition:
        definition: Optional[TokenDefinition] = self._entries.get(name)
        if definition is None:
            raise UnknownToken(name)
        return definition

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TokenDefinition]:
        return iter(list(self._entries.values()))

    def diagnose(self) -> List[TokenDiagnostic]:
        """Validity of every entry, sorted by name, without invoking callbacks."""
        return [definition_diagnose(d) for d in self.list()]

    def list(self) -> List[TokenDefinition]:
        """All current entries, sorted by name."""
        entries: dict[str, TokenDefinition] = self._entries
        return [entries[name] for name in sorted(entries)]
