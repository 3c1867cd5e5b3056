"""
Callback resolution for parsed token occurrences.

Looks up each occurrence in the token registry, checks it, and invokes the
registered callback. Every failure is contained here and reported as an
OccurrenceDiagnostic; nothing a callback does can escape to the caller.

Resolution order for one occurrence:
1. Name pattern check          -> skipped-invalid-name
2. Registry lookup             -> skipped-no-callback
3. Callback shape re-check     -> skipped-invalid-callback
4. Invocation                  -> succeeded / callback-failed
"""

from abc import ABC, abstractmethod
from typing import Optional, Self
from cachetokens.lib.log import LOG
from cachetokens.lib.registry import TokenRegistry, callback_check, name_isValid
from cachetokens.models.dataModel import (
    OccurrenceDiagnostic,
    OccurrenceStatus,
    ParsedOccurrence,
    RequestContext,
    TokenDefinition,
    TokenParameters,
)


class TokenHandler(ABC):
    """Base class for class-based token callbacks.

    Subclasses implement `render`; instances are registered like any other
    callback.

    Example:
        class Greeting(TokenHandler):
            def render(self, name, params, context):
                return f"Hello {params.get('who', 'World')}"

        registry.register("greet", Greeting())
    """

    def __call__(
        self: Self, name: str, params: TokenParameters, context: RequestContext
    ) -> str:
        return self.render(name, params, context)

    @abstractmethod
    def render(
        self: Self, name: str, params: TokenParameters, context: RequestContext
    ) -> str:
        """Produce the replacement text for one occurrence."""
        ...


class CallbackResolver:
    """Resolver mapping occurrences to replacement text via the registry."""

    def __init__(self: Self, registry: TokenRegistry) -> None:
        """Initialize resolver with a shared token registry."""
        self.registry: TokenRegistry = registry

    def _diagnostic(
        self: Self,
        occurrence: ParsedOccurrence,
        status: OccurrenceStatus,
        detail: Optional[str] = None,
    ) -> OccurrenceDiagnostic:
        if status != OccurrenceStatus.SUCCEEDED:
            LOG(
                f"Token '{occurrence.tokenName}' at {occurrence.start} "
                f"{status.value}{': ' + detail if detail else ''}"
            )
        return OccurrenceDiagnostic(
            name=occurrence.tokenName,
            start=occurrence.start,
            end=occurrence.end,
            status=status,
            detail=detail,
        )

    def resolve(
        self: Self, occurrence: ParsedOccurrence, context: RequestContext
    ) -> tuple[Optional[str], OccurrenceDiagnostic]:
        """Resolve one occurrence to its replacement.

        Args:
            occurrence: Parsed token occurrence
            context: Request context handed to the callback

        Returns:
            (replacement, diagnostic); replacement is None whenever the
            occurrence must stay as literal text
        """
        if not name_isValid(occurrence.tokenName):
            return None, self._diagnostic(
                occurrence, OccurrenceStatus.SKIPPED_INVALID_NAME
            )

        definition: Optional[TokenDefinition] = self.registry.lookup(
            occurrence.tokenName
        )
        if definition is None:
            return None, self._diagnostic(
                occurrence, OccurrenceStatus.SKIPPED_NO_CALLBACK
            )

        reason: Optional[str] = callback_check(definition.callback)
        if reason:
            return None, self._diagnostic(
                occurrence, OccurrenceStatus.SKIPPED_INVALID_CALLBACK, reason
            )

        try:
            value: object = definition.callback(
                occurrence.tokenName, occurrence.parameters, context
            )
        except Exception as e:
            return None, self._diagnostic(
                occurrence,
                OccurrenceStatus.CALLBACK_FAILED,
                f"{type(e).__name__}: {e}",
            )

        if not isinstance(value, str):
            return None, self._diagnostic(
                occurrence,
                OccurrenceStatus.CALLBACK_FAILED,
                f"callback returned {type(value).__name__}, expected str",
            )
        return value, self._diagnostic(occurrence, OccurrenceStatus.SUCCEEDED)
