"""
Substitution engine.

Runs the token parser and the callback resolver over a whole text in a
single left-to-right pass. Text outside resolved tokens is copied
verbatim; resolved spans are replaced by the callback output, which is
never scanned again.
"""

from typing import Optional, Self
from cachetokens.lib.parser import TokenParser
from cachetokens.lib.registry import TokenRegistry
from cachetokens.lib.resolver import CallbackResolver
from cachetokens.models.dataModel import (
    DelimiterConfig,
    OccurrenceDiagnostic,
    RequestContext,
    SubstitutionResult,
)


class SubstitutionEngine:
    """Parser plus resolver over a shared registry.

    Attributes:
        parser: Token parser for the delimiter configuration
        resolver: Callback resolver over the registry
    """

    def __init__(self: Self, config: DelimiterConfig, registry: TokenRegistry) -> None:
        self.parser: TokenParser = TokenParser(config)
        self.resolver: CallbackResolver = CallbackResolver(registry)

    @property
    def config(self: Self) -> DelimiterConfig:
        return self.parser.config

    def substitute(
        self: Self, text: str, context: Optional[RequestContext] = None
    ) -> SubstitutionResult:
        """Replace every resolvable token in text.

        Args:
            text: Text to rewrite
            context: Request context handed to callbacks

        Returns:
            SubstitutionResult with the rewritten text and one diagnostic
            per parsed occurrence
        """
        if not self.parser.contains(text):
            return SubstitutionResult(text=text)

        context = context if context is not None else RequestContext()
        parts: list[str] = []
        diagnostics: list[OccurrenceDiagnostic] = []
        lastEnd: int = 0

        for occurrence in self.parser.parse(text):
            replacement, diagnostic = self.resolver.resolve(occurrence, context)
            diagnostics.append(diagnostic)
            if replacement is None:
                continue
            parts.append(text[lastEnd : occurrence.start])
            parts.append(replacement)
            lastEnd = occurrence.end

        if not parts:
            return SubstitutionResult(text=text, diagnostics=diagnostics)

        parts.append(text[lastEnd:])
        return SubstitutionResult(text="".join(parts), diagnostics=diagnostics)
