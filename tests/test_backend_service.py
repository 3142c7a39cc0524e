import pytest

from jaxrs_pipeline.backends.cli import CliBackend
from jaxrs_pipeline.backends.registry import MARKDOWN, PLAINTEXT, SWAGGER
from jaxrs_pipeline.core.errors import InvalidConfiguration
from jaxrs_pipeline.domain.schemas import AnalyzerOptions
from jaxrs_pipeline.services.backend_service import BackendService


def test_text_backends_only_get_inline_prettify():
    opts = AnalyzerOptions(inline_prettify=False, swagger_schemes=["gopher"], swagger_tags_path_offset=-3)
    assert BackendService().build_option_map(PLAINTEXT, opts) == {"inlinePrettify": False}


def test_inline_prettify_defaults_to_true():
    assert BackendService().build_option_map(MARKDOWN, AnalyzerOptions()) == {"inlinePrettify": True}


def test_swagger_option_map_defaults():
    assert BackendService().build_option_map(SWAGGER, AnalyzerOptions()) == {
        "inlinePrettify": True,
        "swaggerSchemes": "http",
        "domain": "",
        "renderSwaggerTags": False,
        "swaggerTagsPathOffset": 0,
    }


def test_swagger_schemes_are_case_insensitive_and_deduplicated():
    opts = AnalyzerOptions(swagger_schemes=["HTTP", "https", "Http", " wss "])
    assert BackendService().build_option_map(SWAGGER, opts)["swaggerSchemes"] == "http,https,wss"


def test_schemes_accept_comma_separated_string():
    opts = AnalyzerOptions.model_validate({"swaggerSchemes": "HTTP, https"})
    assert opts.swagger_schemes == ["HTTP", "https"]
    assert BackendService().build_option_map(SWAGGER, opts)["swaggerSchemes"] == "http,https"


def test_unknown_scheme_lists_valid_schemes():
    with pytest.raises(InvalidConfiguration) as exc:
        BackendService().validate(SWAGGER, AnalyzerOptions(swagger_schemes=["http", "ftp"]))
    assert "ftp" in str(exc.value)
    assert "http, https, ws, wss" in str(exc.value)
    assert exc.value.key == "swaggerSchemes"


def test_empty_schemes_rejected():
    with pytest.raises(InvalidConfiguration, match="must not be empty"):
        BackendService().validate(SWAGGER, AnalyzerOptions(swagger_schemes=["", " "]))


def test_negative_tags_path_offset_rejected():
    with pytest.raises(InvalidConfiguration) as exc:
        BackendService().validate(SWAGGER, AnalyzerOptions(swagger_tags_path_offset=-1))
    assert exc.value.key == "swaggerTagsPathOffset"


@pytest.mark.parametrize("offset", [0, 1, 7])
def test_non_negative_tags_path_offset_accepted(offset):
    opts = AnalyzerOptions(swagger_tags_path_offset=offset, render_swagger_tags=True, deployed_domain="api.example.com")
    config = BackendService().build_option_map(SWAGGER, opts)
    assert config["swaggerTagsPathOffset"] == offset
    assert config["renderSwaggerTags"] is True
    assert config["domain"] == "api.example.com"


def test_configure_builds_fresh_configured_backends():
    svc = BackendService()
    opts = AnalyzerOptions(swagger_schemes=["https"])
    first = svc.configure(SWAGGER, opts)
    second = svc.configure(SWAGGER, opts)

    assert isinstance(first, CliBackend)
    assert first is not second
    assert first.name() == "swagger"
    assert first.options == second.options == svc.build_option_map(SWAGGER, opts)


def test_configure_uses_injected_factory():
    built = []

    def factory(descriptor):
        backend = CliBackend(descriptor)
        built.append(backend)
        return backend

    BackendService(factory=factory).configure(PLAINTEXT, AnalyzerOptions())
    assert [b.name() for b in built] == ["plaintext"]
