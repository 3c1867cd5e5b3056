"""Tests for the data models."""

import pytest
from pydantic import ValidationError
from cachetokens.models.dataModel import (
    DelimiterConfig,
    OccurrenceDiagnostic,
    OccurrenceStatus,
    RequestContext,
    SubstitutionResult,
)


def test_delimiter_defaults() -> None:
    config = DelimiterConfig()
    assert (config.start, config.end) == ("{{", "}}")
    assert config.paramSeparator == "|"
    assert config.keyValueSeparator == ":"
    assert config.multivalueSeparator == ","


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"start": ""}, "must not be empty"),
        ({"end": "}}}}}}"}, "longer than 5"),
        ({"paramSeparator": ":"}, "are both"),
        ({"start": "[[", "end": "[["}, "are both"),
    ],
)
def test_delimiter_validation(overrides: dict, message: str) -> None:
    with pytest.raises(ValidationError, match=message):
        DelimiterConfig(**overrides)


def test_delimiter_config_is_immutable() -> None:
    config = DelimiterConfig()
    with pytest.raises(ValidationError):
        config.start = "<<"


def test_request_context_admin_flag() -> None:
    assert RequestContext(admin=True).isAdmin()
    assert not RequestContext().isAdmin("/admin/")


def test_request_context_admin_path() -> None:
    context = RequestContext(path="/admin/page/edit/")
    assert context.isAdmin("/admin/")
    assert not context.isAdmin(None)
    assert not RequestContext(path="/blog/").isAdmin("/admin/")


def test_request_context_keeps_host_extras() -> None:
    context = RequestContext(path="/", language="de")
    assert context.language == "de"


def test_substitution_result_counts() -> None:
    result = SubstitutionResult(
        text="x",
        diagnostics=[
            OccurrenceDiagnostic(name="a", start=0, end=5, status=OccurrenceStatus.SUCCEEDED),
            OccurrenceDiagnostic(
                name="b", start=5, end=10, status=OccurrenceStatus.SKIPPED_NO_CALLBACK
            ),
        ],
    )
    assert result.replaced == 1
    assert [d.name for d in result.skipped] == ["b"]
