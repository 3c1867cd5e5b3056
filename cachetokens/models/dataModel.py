"""
dataModel.py

This module defines the data models used throughout the token replacement
engine. Long-lived values leverage Pydantic for validation; the per-pass
parse products are plain dataclasses.

Features:
- Delimiter configuration with length and distinctness validation.
- Structured token parameters (positional, key-value, multivalue).
- Parsed token occurrences and per-occurrence diagnostics.
- Token definitions and registry diagnostics.
- Request context handed to token callbacks.

Usage:
Import these models to validate and structure data used by the parser,
the registry and the substitution engine.
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import Any, Callable, Optional, Protocol, Self, runtime_checkable
from dataclasses import dataclass, field
from enum import Enum

DELIMITER_MAX_LENGTH: int = 5

ParamValue = str | list[str]


class OccurrenceStatus(Enum):
    """
    Outcome of resolving one token occurrence.
    """

    SUCCEEDED = "succeeded"
    SKIPPED_INVALID_NAME = "skipped-invalid-name"
    SKIPPED_INVALID_CALLBACK = "skipped-invalid-callback"
    SKIPPED_NO_CALLBACK = "skipped-no-callback"
    CALLBACK_FAILED = "callback-failed"


class DelimiterConfig(BaseModel):
    """
    The five strings that define the token grammar.

    Attributes:
        start: Opens a token, e.g. "{{"
        end: Closes a token, e.g. "}}"
        paramSeparator: Separates the name and the parameter fields
        keyValueSeparator: Splits a parameter field into key and value
        multivalueSeparator: Splits a value into a list of sub-values

    Note:
        All five must be non-empty, at most DELIMITER_MAX_LENGTH long and
        mutually distinct. Instances are immutable.
    """

    model_config = ConfigDict(frozen=True)

    start: str = "{{"
    end: str = "}}"
    paramSeparator: str = "|"
    keyValueSeparator: str = ":"
    multivalueSeparator: str = ","

    @field_validator(
        "start", "end", "paramSeparator", "keyValueSeparator", "multivalueSeparator"
    )
    @classmethod
    def delimiter_checkLength(cls, value: str) -> str:
        if not value:
            raise ValueError("delimiter must not be empty")
        if len(value) > DELIMITER_MAX_LENGTH:
            raise ValueError(
                f"delimiter {value!r} is longer than {DELIMITER_MAX_LENGTH} characters"
            )
        return value

    @model_validator(mode="after")
    def delimiters_checkDistinct(self) -> Self:
        seen: dict[str, str] = {}
        for fieldName, value in self.model_dump().items():
            if value in seen:
                raise ValueError(
                    f"{fieldName} and {seen[value]} are both {value!r}"
                )
            seen[value] = fieldName
        return self


@dataclass
class TokenParameters:
    """Structured parameters of one token occurrence.

    Attributes:
        positional: Fields without a key-value separator, in order
        named: Key-value fields; a repeated key keeps its last value
        raw: The parameter text exactly as it appeared in the token

    Any value that contained the multivalue separator is a list of
    sub-values instead of a string.
    """

    positional: list[ParamValue] = field(default_factory=list)
    named: dict[str, ParamValue] = field(default_factory=dict)
    raw: str = ""

    def __getitem__(self, key: int | str) -> ParamValue:
        if isinstance(key, int):
            return self.positional[key]
        return self.named[key]

    def __contains__(self, key: object) -> bool:
        if isinstance(key, int):
            return -len(self.positional) <= key < len(self.positional)
        return key in self.named

    def get(self, key: str, default: Optional[ParamValue] = None) -> Optional[ParamValue]:
        """Return the value of a key-value parameter or `default`."""
        return self.named.get(key, default)

    def values(self, key: str) -> list[str]:
        """Return a key-value parameter as a list, whatever its shape.

        Args:
            key: Parameter key

        Returns:
            The sub-values of a multivalue parameter, a one-element list
            for a scalar, or an empty list if the key is absent
        """
        value: Optional[ParamValue] = self.named.get(key)
        if value is None:
            return []
        if isinstance(value, list):
            return list(value)
        return [value]


@dataclass(frozen=True)
class ParsedOccurrence:
    """One token found during a parse pass.

    Attributes:
        tokenName: Name segment of the token body, stripped
        start: Offset of the start delimiter in the source text
        end: Offset just past the end delimiter
        rawParameterText: Text after the first parameter separator
        parameters: Structured parameter set
    """

    tokenName: str
    start: int
    end: int
    rawParameterText: str
    parameters: TokenParameters

    @property
    def sourceSpan(self) -> tuple[int, int]:
        return (self.start, self.end)


class RequestContext(BaseModel):
    """Request information handed to token callbacks.

    Attributes:
        path: Requested URL path, if known
        admin: Whether the host flagged the request as administrative
        user: Host-defined user object, if any

    Extra attributes supplied by the host are kept and reachable as
    normal attributes.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    path: Optional[str] = None
    admin: bool = False
    user: Any = None

    def isAdmin(self, adminPathPrefix: Optional[str] = None) -> bool:
        """Check whether the request targets the administrative surface.

        Args:
            adminPathPrefix: Path prefix of the admin area, if any

        Returns:
            True if flagged as admin or the path starts with the prefix
        """
        if self.admin:
            return True
        if adminPathPrefix and self.path:
            return self.path.startswith(adminPathPrefix)
        return False


@runtime_checkable
class TokenCallback(Protocol):
    """Protocol defining the callback interface for token substitution.

    Callbacks receive the token name, its parsed parameters and the request
    context, and return the replacement text. To signal a failure they raise
    (preferably `CallbackFailure`); the occurrence is then left untouched.
    """

    def __call__(
        self, name: str, params: TokenParameters, context: RequestContext
    ) -> str: ...


class TokenDefinition(BaseModel):
    """
    Model for a registered token.

    Attributes:
        name (str): Token name as written between the delimiters.
        callback (Callable): Invoked as callback(name, params, context).
        metadata (dict): Free-form information, e.g. a description.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str
    callback: Callable[..., Any]
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def description(self) -> str:
        return str(self.metadata.get("description", ""))


class TokenDiagnostic(BaseModel):
    """Validity of one registry entry, computed without invoking it.

    Attributes:
        name: Token name
        nameValid: Name matches the identifier pattern
        callbackValid: Callback is invocable as (name, params, context)
        reason: Why the callback is invalid, if it is
        description: Description taken from the entry metadata
    """

    name: str
    nameValid: bool
    callbackValid: bool
    reason: Optional[str] = None
    description: str = ""

    @property
    def valid(self) -> bool:
        return self.nameValid and self.callbackValid


class OccurrenceDiagnostic(BaseModel):
    """Outcome of one occurrence in a substitution pass.

    Attributes:
        name: Token name as parsed
        start: Offset of the occurrence in the source text
        end: Offset just past the occurrence
        status: What happened to the occurrence
        detail: Failure detail, if any
    """

    name: str
    start: int
    end: int
    status: OccurrenceStatus
    detail: Optional[str] = None


class SubstitutionResult(BaseModel):
    """Result of a substitution pass.

    Attributes:
        text: The rewritten text
        diagnostics: One entry per parsed occurrence, in source order
    """

    text: str
    diagnostics: list[OccurrenceDiagnostic] = Field(default_factory=list)

    @property
    def replaced(self) -> int:
        return sum(
            1 for d in self.diagnostics if d.status == OccurrenceStatus.SUCCEEDED
        )

    @property
    def skipped(self) -> list[OccurrenceDiagnostic]:
        return [
            d for d in self.diagnostics if d.status != OccurrenceStatus.SUCCEEDED
        ]
