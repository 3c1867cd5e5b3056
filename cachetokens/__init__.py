"""
Cacheable token replacements.

Resolves delimited tokens in rendered output through registered callbacks,
after any render cache, so cached pages can still carry per-request values.
"""

from cachetokens.config.settings import App, appsettings
from cachetokens.lib.errors import (
    CallbackFailure,
    DuplicateToken,
    InvalidCallback,
    InvalidConfiguration,
    InvalidTokenName,
    RegistrationError,
    TokenError,
    UnknownToken,
)
from cachetokens.lib.engine import SubstitutionEngine
from cachetokens.lib.extensions import extension_load, extensions_load
from cachetokens.lib.hook import RenderHookAdapter
from cachetokens.lib.parser import TokenParser, occurrence_serialize
from cachetokens.lib.registry import TokenRegistry, callback_isValid, name_isValid
from cachetokens.lib.replacements import TokenReplacements
from cachetokens.lib.resolver import CallbackResolver, TokenHandler
from cachetokens.models.dataModel import (
    DelimiterConfig,
    OccurrenceStatus,
    ParsedOccurrence,
    RequestContext,
    SubstitutionResult,
    TokenCallback,
    TokenDefinition,
    TokenParameters,
)

__all__ = [
    "App",
    "appsettings",
    "CallbackFailure",
    "CallbackResolver",
    "DelimiterConfig",
    "DuplicateToken",
    "InvalidCallback",
    "InvalidConfiguration",
    "InvalidTokenName",
    "OccurrenceStatus",
    "ParsedOccurrence",
    "RegistrationError",
    "RenderHookAdapter",
    "RequestContext",
    "SubstitutionEngine",
    "SubstitutionResult",
    "TokenCallback",
    "TokenDefinition",
    "TokenError",
    "TokenHandler",
    "TokenParameters",
    "TokenParser",
    "TokenRegistry",
    "TokenReplacements",
    "UnknownToken",
    "callback_isValid",
    "extension_load",
    "extensions_load",
    "name_isValid",
    "occurrence_serialize",
]
