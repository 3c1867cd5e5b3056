"""Tests for the token parser."""

from typing import Iterator
import pytest
from cachetokens.lib.parser import TokenParser
from cachetokens.models.dataModel import DelimiterConfig, ParsedOccurrence


@pytest.fixture
def parser(config: DelimiterConfig) -> TokenParser:
    return TokenParser(config)


def test_key_value_and_multivalue(parser: TokenParser) -> None:
    occurrences = parser.occurrences("{{greet|lang:en|tags:a,b,c}}")
    assert len(occurrences) == 1
    occurrence = occurrences[0]
    assert occurrence.tokenName == "greet"
    assert occurrence.parameters.named == {"lang": "en", "tags": ["a", "b", "c"]}
    assert occurrence.parameters.positional == []
    assert occurrence.rawParameterText == "lang:en|tags:a,b,c"


def test_positional_parameters(parser: TokenParser) -> None:
    occurrence = parser.occurrences("{{image|hero|wide,tall}}")[0]
    assert occurrence.parameters.positional == ["hero", ["wide", "tall"]]
    assert occurrence.parameters.named == {}


def test_name_without_parameters(parser: TokenParser) -> None:
    occurrence = parser.occurrences("{{name}}")[0]
    assert occurrence.tokenName == "name"
    assert occurrence.rawParameterText == ""
    assert occurrence.parameters.positional == []
    assert occurrence.parameters.named == {}


def test_whitespace_inside_token_is_stripped(parser: TokenParser) -> None:
    occurrence = parser.occurrences("{{ name | key : value | x , y }}")[0]
    assert occurrence.tokenName == "name"
    assert occurrence.parameters.named == {"key": "value"}
    assert occurrence.parameters.positional == [["x", "y"]]


def test_spans(parser: TokenParser) -> None:
    text = "Hi {{x}}, bye {{y|1}}!"
    spans = [o.sourceSpan for o in parser.parse(text)]
    assert spans == [(3, 8), (14, 21)]
    assert [text[start:end] for start, end in spans] == ["{{x}}", "{{y|1}}"]


def test_adjacent_tokens_do_not_overlap(parser: TokenParser) -> None:
    occurrences = parser.occurrences("{{a}}{{b}}")
    assert [o.tokenName for o in occurrences] == ["a", "b"]
    assert occurrences[1].start == occurrences[0].end == 5


def test_unterminated_token_is_literal(parser: TokenParser) -> None:
    assert parser.occurrences("{{broken") == []
    occurrences = parser.occurrences("{{ok}} and {{broken")
    assert [o.tokenName for o in occurrences] == ["ok"]


def test_start_inside_body_is_not_nested(parser: TokenParser) -> None:
    occurrences = parser.occurrences("{{a {{b}}")
    assert len(occurrences) == 1
    assert occurrences[0].tokenName == "a {{b"
    assert occurrences[0].sourceSpan == (0, 9)


def test_empty_body(parser: TokenParser) -> None:
    occurrences = parser.occurrences("x{{}}y")
    assert len(occurrences) == 1
    assert occurrences[0].tokenName == ""


def test_no_start_delimiter(parser: TokenParser) -> None:
    assert parser.occurrences("plain text }} with an end only") == []
    assert parser.occurrences("") == []


def test_parse_is_lazy_and_restartable(parser: TokenParser) -> None:
    text = "{{a}} {{b|c:d}}"
    stream = parser.parse(text)
    assert isinstance(stream, Iterator)
    first: ParsedOccurrence = next(stream)
    assert first.tokenName == "a"
    assert parser.occurrences(text) == parser.occurrences(text)


def test_parse_does_not_mutate_input(parser: TokenParser) -> None:
    text = "Hello {{name}}!"
    parser.occurrences(text)
    assert text == "Hello {{name}}!"


def test_custom_delimiters() -> None:
    config = DelimiterConfig(
        start="[%",
        end="%]",
        paramSeparator=";",
        keyValueSeparator="=",
        multivalueSeparator="+",
    )
    parser = TokenParser(config)
    occurrence = parser.occurrences("<a>[% link ; target=blank ; rel=a+b ; 3 %]</a>")[0]
    assert occurrence.tokenName == "link"
    assert occurrence.parameters.named == {"target": "blank", "rel": ["a", "b"]}
    assert occurrence.parameters.positional == ["3"]
    assert occurrence.sourceSpan == (3, 42)


def test_multi_character_end_delimiter_partially_present(parser: TokenParser) -> None:
    occurrences = parser.occurrences("{{a} b}}")
    assert occurrences[0].tokenName == "a} b"
