"""
Render hook integration.

The host page-rendering pipeline calls the adapter with the complete
rendered output of a page and the request context, after any render cache
has supplied or stored that output. The adapter decides whether to run the
substitution engine and returns the text to send.

Because it runs after the cache, cached output still carries its tokens
and receives per-request values every time it is served.

Decision order:
1. Automatic mode disabled (or configuration invalid) -> unchanged
2. Frontend-only and the request is administrative    -> unchanged
3. Otherwise                                          -> substituted
"""

from functools import wraps
from typing import Any, Callable, Optional, Self
from cachetokens.config.settings import App
from cachetokens.lib.engine import SubstitutionEngine
from cachetokens.lib.log import LOG
from cachetokens.models.dataModel import RequestContext, SubstitutionResult


class RenderHookAdapter:
    """Post-render, post-cache hook for a host pipeline.

    Attributes:
        settings: Application settings holding the mode flags
        engine: Substitution engine, or None if the configuration is invalid
    """

    def __init__(
        self: Self, settings: App, engine: Optional[SubstitutionEngine]
    ) -> None:
        self.settings: App = settings
        self.engine: Optional[SubstitutionEngine] = engine

    @property
    def active(self: Self) -> bool:
        return self.settings.automaticModeEnabled and self.engine is not None

    def shouldRun(self: Self, context: RequestContext) -> bool:
        """Decide whether substitution applies to this request."""
        if not self.active:
            return False
        if self.settings.frontendOnlyMode and context.isAdmin(
            self.settings.adminPathPrefix
        ):
            LOG(f"Skipping token replacement for admin request {context.path!r}")
            return False
        return True

    def run(
        self: Self, renderedText: str, context: Optional[RequestContext] = None
    ) -> SubstitutionResult:
        """Apply the hook and keep the per-occurrence diagnostics.

        Args:
            renderedText: Complete output of the page, possibly from cache
            context: Request context of the current request

        Returns:
            SubstitutionResult; without diagnostics if the hook did not run
        """
        context = context if context is not None else RequestContext()
        if not self.shouldRun(context):
            return SubstitutionResult(text=renderedText)

        result: SubstitutionResult = self.engine.substitute(renderedText, context)
        if result.diagnostics:
            LOG(
                f"Render hook replaced {result.replaced} of "
                f"{len(result.diagnostics)} tokens"
            )
        return result

    def render_after(
        self: Self, renderedText: str, context: Optional[RequestContext] = None
    ) -> str:
        """Hook entry point called by the host after rendering.

        Returns:
            The rewritten output, or renderedText untouched
        """
        return self.run(renderedText, context).text

    __call__ = render_after

    def wrap(self: Self, render: Callable[..., str]) -> Callable[..., str]:
        """Decorate a host render function with this hook.

        The wrapped function takes an extra keyword argument `context` and
        applies substitution to whatever `render` returns, so a cached
        `render` keeps its cache while its output is still personalized.

        Example:
            @hook.wrap
            @functools.lru_cache
            def page_render(pageId): ...

            page_render(7, context=RequestContext(user=user))
        """

        @wraps(render)
        def wrapped(
            *args: Any, context: Optional[RequestContext] = None, **kwargs: Any
        ) -> str:
            return self.render_after(render(*args, **kwargs), context)

        return wrapped
