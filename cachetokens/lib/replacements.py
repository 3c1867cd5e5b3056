"""
Token replacement service.

Ties configuration, registry, engine and render hook together. Built once
at process start and shared by reference with request-handling code.

Example:
    registry = TokenRegistry()
    registry.register("user", lambda name, params, context: context.user.name)
    replacements = TokenReplacements(App(), registry)

    # automatic mode: host calls the hook after (cached) rendering
    output = replacements.hook(output, RequestContext(user=current_user))

    # manual mode
    text = replacements.replaceTokens("Hello {{user}}", context)
"""

from typing import Optional, Self
from cachetokens.config.settings import App, appsettings, delimiterConfig_build
from cachetokens.lib.engine import SubstitutionEngine
from cachetokens.lib.errors import InvalidConfiguration
from cachetokens.lib.hook import RenderHookAdapter
from cachetokens.lib.log import LOG
from cachetokens.lib.registry import TokenRegistry
from cachetokens.models.dataModel import (
    DelimiterConfig,
    RequestContext,
    SubstitutionResult,
)


class TokenReplacements:
    """Process-wide token replacement service.

    Attributes:
        settings: Application settings
        registry: Shared token registry
        config: Delimiter configuration, None if the settings are invalid
        configError: Why the configuration was rejected, if it was
        engine: Substitution engine, None if the settings are invalid
        hook: Render hook adapter for the host pipeline
    """

    def __init__(
        self: Self,
        settings: Optional[App] = None,
        registry: Optional[TokenRegistry] = None,
    ) -> None:
        self.settings: App = settings if settings is not None else appsettings
        self.registry: TokenRegistry = (
            registry if registry is not None else TokenRegistry()
        )
        self.config: Optional[DelimiterConfig] = None
        self.configError: Optional[InvalidConfiguration] = None
        self.engine: Optional[SubstitutionEngine] = None

        try:
            self.config = delimiterConfig_build(self.settings)
            self.engine = SubstitutionEngine(self.config, self.registry)
        except InvalidConfiguration as e:
            self.configError = e
            LOG(f"Invalid delimiter configuration, token replacement disabled: {e}")

        self.hook: RenderHookAdapter = RenderHookAdapter(self.settings, self.engine)

    @property
    def automaticMode(self: Self) -> bool:
        """True if the render hook will substitute at all."""
        return self.hook.active

    def substitute(
        self: Self, text: str, context: Optional[RequestContext] = None
    ) -> SubstitutionResult:
        """Run one substitution pass and report per-occurrence diagnostics.

        With an invalid configuration the text is returned unchanged.
        """
        if self.engine is None:
            return SubstitutionResult(text=text)
        return self.engine.substitute(text, context)

    def replaceTokens(
        self: Self, text: str, context: Optional[RequestContext] = None
    ) -> str:
        """Manual entry point, independent of automatic mode.

        Args:
            text: Text containing tokens
            context: Request context handed to callbacks

        Returns:
            Text with every resolvable token replaced
        """
        return self.substitute(text, context).text
