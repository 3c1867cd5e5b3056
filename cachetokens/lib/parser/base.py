r"""
Token parser for delimited placeholders.

Scans text for tokens bounded by the configured start and end delimiters
and yields one ParsedOccurrence per token, left to right, without
overlaps and without touching the text.

The parser handles:
- Configurable start/end delimiters of any length up to five characters
- Name and parameter splitting through the grammar module
- Unterminated tokens, which are left as literal text
- Lazy, restartable iteration (each call to `parse` scans afresh)

Example:
    parser = TokenParser(DelimiterConfig())
    for occurrence in parser.parse("Hello {{name|lang:en}}!"):
        print(occurrence.tokenName, occurrence.parameters.named)
"""

from typing import Iterator, Self
from cachetokens.lib.parser.grammar import body_split, parameters_parse
from cachetokens.models.dataModel import DelimiterConfig, ParsedOccurrence


class TokenParser:
    """Generic token parser over a delimiter configuration.

    Attributes:
        config: Delimiter configuration defining the grammar
    """

    def __init__(self: Self, config: DelimiterConfig) -> None:
        """Initialize parser with a delimiter configuration.

        Args:
            config: Validated delimiter configuration
        """
        self.config: DelimiterConfig = config

    def contains(self: Self, text: str) -> bool:
        """Check whether text can hold a token at all."""
        return bool(text) and self.config.start in text

    def parse(self: Self, text: str) -> Iterator[ParsedOccurrence]:
        """Yield all token occurrences in text.

        Args:
            text: Text to scan

        Yields:
            ParsedOccurrence for each terminated token, in source order

        Note:
            A start delimiter without a following end delimiter is literal
            text. Since no end delimiter follows it, no later token can be
            terminated either and scanning stops there.
        """
        if not self.contains(text):
            return

        start: str = self.config.start
        end: str = self.config.end
        position: int = 0

        while True:
            tokenStart: int = text.find(start, position)
            if tokenStart < 0:
                return
            bodyStart: int = tokenStart + len(start)
            bodyEnd: int = text.find(end, bodyStart)
            if bodyEnd < 0:
                return
            tokenEnd: int = bodyEnd + len(end)

            name, rawParams = body_split(text[bodyStart:bodyEnd], self.config)
            yield ParsedOccurrence(
                tokenName=name,
                start=tokenStart,
                end=tokenEnd,
                rawParameterText=rawParams,
                parameters=parameters_parse(rawParams, self.config),
            )
            position = tokenEnd

    def occurrences(self: Self, text: str) -> list[ParsedOccurrence]:
        """Return all occurrences in text as a list."""
        return list(self.parse(text))
