import pytest

from jaxrs_pipeline.backends.base import BackendDescriptor
from jaxrs_pipeline.backends.registry import PLAINTEXT, SWAGGER, BackendRegistry
from jaxrs_pipeline.core.errors import InvalidConfiguration


def test_list_in_declaration_order():
    assert BackendRegistry().list() == ["plaintext", "asciidoc", "markdown", "swagger"]


@pytest.mark.parametrize(
    "name, file_name",
    [
        ("plaintext", "rest-resources.txt"),
        ("asciidoc", "rest-resources.adoc"),
        ("markdown", "rest-resources.md"),
        ("swagger", "swagger.json"),
    ],
)
def test_resolve_canonical_names(name, file_name):
    d = BackendRegistry().resolve(name)
    assert d.name == name
    assert d.file_name == file_name


@pytest.mark.parametrize("name", ["Swagger", "SWAGGER", "sWaGgEr", " swagger "])
def test_resolve_is_case_insensitive_and_returns_same_descriptor(name):
    reg = BackendRegistry()
    assert reg.resolve(name) is reg.resolve("swagger") is SWAGGER


def test_resolve_unknown_lists_valid_names():
    with pytest.raises(InvalidConfiguration) as exc:
        BackendRegistry().resolve("html")
    assert "Backend html not valid" in str(exc.value)
    assert str(exc.value).endswith("Valid values are: plaintext, asciidoc, markdown, swagger")
    assert exc.value.key == "backend"


def test_resolve_unknown_with_reduced_backend_set():
    reg = BackendRegistry([PLAINTEXT, SWAGGER])
    with pytest.raises(InvalidConfiguration, match="Valid values are: plaintext, swagger$"):
        reg.resolve("markdown")


def test_duplicate_file_names_rejected():
    with pytest.raises(ValueError, match="unique"):
        BackendRegistry([PLAINTEXT, BackendDescriptor("text", "rest-resources.txt")])


def test_duplicate_names_rejected():
    with pytest.raises(ValueError, match="Duplicate"):
        BackendRegistry([PLAINTEXT, BackendDescriptor("PlainText", "other.txt")])
