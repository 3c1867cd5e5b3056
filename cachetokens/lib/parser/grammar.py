"""
Parameter grammar for token bodies.

A token body looks like

    name|positional|key:value|key:a,b,c

with the separators taken from a DelimiterConfig. The body is split on the
parameter separator; a field holding the key-value separator becomes a
key-value entry (split at the first separator), any other field is
positional. Values holding the multivalue separator become lists.

Limitations:
    There is no escape mechanism. A value cannot contain any of the
    configured separators, and a key-value value cannot contain the
    key-value separator without it ending up in the value verbatim.
"""

from typing import Mapping, Sequence
from cachetokens.models.dataModel import DelimiterConfig, ParamValue, TokenParameters


def body_split(body: str, config: DelimiterConfig) -> tuple[str, str]:
    """Split a token body into name and raw parameter text.

    Args:
        body: Text between the start and end delimiters
        config: Delimiter configuration

    Returns:
        (name, rawParameterText); the name is stripped, the parameter text
        is empty if the body holds no parameter separator
    """
    name, _, rawParams = body.partition(config.paramSeparator)
    return name.strip(), rawParams


def value_parse(value: str, config: DelimiterConfig) -> ParamValue:
    """Turn a raw field value into a scalar or a list of sub-values."""
    value = value.strip()
    if config.multivalueSeparator in value:
        return [part.strip() for part in value.split(config.multivalueSeparator)]
    return value


def parameters_parse(rawParams: str, config: DelimiterConfig) -> TokenParameters:
    """Parse the parameter segment of a token body.

    Args:
        rawParams: Text after the first parameter separator
        config: Delimiter configuration

    Returns:
        TokenParameters with positional and key-value entries

    Note:
        An empty field is an empty positional value; only an entirely
        empty parameter segment yields no fields. A field whose key is
        empty is positional.
        A repeated key keeps its last value.
    """
    params: TokenParameters = TokenParameters(raw=rawParams)
    if not rawParams.strip():
        return params

    for fieldText in rawParams.split(config.paramSeparator):
        key, sep, value = fieldText.partition(config.keyValueSeparator)
        key = key.strip()
        if sep and key:
            params.named[key] = value_parse(value, config)
        else:
            params.positional.append(value_parse(fieldText, config))
    return params


def _value_serialize(value: ParamValue, config: DelimiterConfig) -> str:
    if isinstance(value, (list, tuple)):
        return config.multivalueSeparator.join(value)
    return value


def occurrence_serialize(
    name: str,
    config: DelimiterConfig,
    positional: Sequence[ParamValue] = (),
    named: Mapping[str, ParamValue] | None = None,
) -> str:
    """Render a token back to its textual form.

    Args:
        name: Token name
        config: Delimiter configuration
        positional: Positional values
        named: Key-value parameters

    Returns:
        Token text that parses back into the same name and parameters,
        provided no value contains a reserved separator

    Example:
        occurrence_serialize("greet", config, named={"tags": ["a", "b"]})
        -> "{{greet|tags:a,b}}"
    """
    fields: list[str] = [name]
    fields.extend(_value_serialize(value, config) for value in positional)
    for key, value in (named or {}).items():
        fields.append(f"{key}{config.keyValueSeparator}{_value_serialize(value, config)}")
    return f"{config.start}{config.paramSeparator.join(fields)}{config.end}"
