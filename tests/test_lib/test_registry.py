"""Tests for the token registry and its validity predicates."""

import threading
import pytest
from cachetokens.lib.errors import (
    DuplicateToken,
    InvalidCallback,
    InvalidTokenName,
    UnknownToken,
)
from cachetokens.lib.registry import (
    TokenRegistry,
    callback_check,
    callback_isValid,
    definition_diagnose,
    name_isValid,
)
from cachetokens.lib.resolver import TokenHandler
from cachetokens.models.dataModel import TokenDefinition


def year(name, params, context):
    return "2026"


class Upper(TokenHandler):
    def render(self, name, params, context):
        return name.upper()


class Site:
    def title(self, name, params, context):
        return "My Site"


@pytest.mark.parametrize("name", ["name", "user_name", "Token2", "_", "123"])
def test_valid_names(name: str) -> None:
    assert name_isValid(name)


@pytest.mark.parametrize(
    "name",
    ["", "with space", "a-b", "{{x}}", "x|y", "ü", "name\n", "\nname", None],
)
def test_invalid_names(name) -> None:
    assert not name_isValid(name)


@pytest.mark.parametrize(
    "callback",
    [
        year,
        Upper(),
        Site().title,
        lambda *args: "",
        lambda name, params, context, extra=None: "",
        print,
    ],
)
def test_valid_callbacks(callback) -> None:
    assert callback_isValid(callback)
    assert callback_check(callback) is None


@pytest.mark.parametrize(
    "callback,reason",
    [
        ("not callable", "not callable"),
        (None, "not callable"),
        (lambda: "World", "does not accept"),
        (lambda name, params: "", "does not accept"),
        (lambda name, params, context, extra: "", "does not accept"),
    ],
)
def test_invalid_callbacks(callback, reason: str) -> None:
    assert not callback_isValid(callback)
    assert reason in callback_check(callback)


def test_register_and_lookup(registry: TokenRegistry) -> None:
    definition = registry.register("year", year, {"description": "Current year"})
    assert isinstance(definition, TokenDefinition)
    assert registry.lookup("year") is definition
    assert registry["year"].description == "Current year"
    assert "year" in registry
    assert len(registry) == 1


def test_lookup_missing(registry: TokenRegistry) -> None:
    assert registry.lookup("missing") is None
    with pytest.raises(UnknownToken):
        registry["missing"]
    with pytest.raises(KeyError):
        registry["missing"]


def test_register_invalid_name_leaves_registry_unchanged(registry: TokenRegistry) -> None:
    with pytest.raises(InvalidTokenName) as exc:
        registry.register("bad name", year)
    assert exc.value.name == "bad name"
    assert len(registry) == 0


def test_register_rejects_trailing_newline(registry: TokenRegistry) -> None:
    with pytest.raises(InvalidTokenName):
        registry.register("year\n", year)
    assert "year\n" not in registry
    assert registry.diagnose() == []


def test_register_invalid_callback(registry: TokenRegistry) -> None:
    with pytest.raises(InvalidCallback) as exc:
        registry.register("hello", lambda: "World")
    assert "does not accept" in exc.value.reason
    assert "hello" not in registry


def test_duplicate_rejected(registry: TokenRegistry) -> None:
    first = registry.register("year", year)
    with pytest.raises(DuplicateToken):
        registry.register("year", Upper())
    assert registry.lookup("year") is first


def test_duplicate_replace(registry: TokenRegistry) -> None:
    registry.register("year", year)
    handler = Upper()
    registry.register("year", handler, replace=True)
    assert registry["year"].callback is handler


def test_unregister(registry: TokenRegistry) -> None:
    registry.register("year", year)
    registry.unregister("year")
    assert "year" not in registry
    with pytest.raises(UnknownToken):
        registry.unregister("year")


def test_metadata_is_copied(registry: TokenRegistry) -> None:
    metadata = {"description": "x"}
    registry.register("year", year, metadata)
    metadata["description"] = "changed"
    assert registry["year"].description == "x"


def test_decorator_registration(registry: TokenRegistry) -> None:
    @registry.token(metadata={"description": "Site name"})
    def site_name(name, params, context):
        return "Example"

    @registry.token("copyright")
    def render_copyright(name, params, context):
        return "(c)"

    assert registry["site_name"].callback is site_name
    assert registry["site_name"].description == "Site name"
    assert registry["copyright"].callback is render_copyright


def test_list_sorted(registry: TokenRegistry) -> None:
    registry.register("zeta", year)
    registry.register("alpha", year)
    assert [d.name for d in registry.list()] == ["alpha", "zeta"]
    assert sorted(d.name for d in registry) == ["alpha", "zeta"]


def test_diagnose_registered(registry: TokenRegistry) -> None:
    registry.register("year", year, {"description": "Current year"})
    diagnostics = registry.diagnose()
    assert len(diagnostics) == 1
    assert diagnostics[0].valid
    assert diagnostics[0].description == "Current year"


def test_diagnose_definition_without_registering() -> None:
    diagnostic = definition_diagnose(TokenDefinition(name="bad name", callback=lambda: ""))
    assert diagnostic.nameValid is False
    assert diagnostic.callbackValid is False
    assert "does not accept" in diagnostic.reason
    assert not diagnostic.valid


def test_concurrent_registration_and_lookup(registry: TokenRegistry) -> None:
    errors: list[Exception] = []

    def writer(offset: int) -> None:
        for i in range(50):
            registry.register(f"t{offset}_{i}", year)

    def reader() -> None:
        for _ in range(200):
            for definition in registry.list():
                if definition.callback is not year:
                    errors.append(AssertionError(definition.name))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    threads += [threading.Thread(target=reader) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert not errors
    assert len(registry) == 200
