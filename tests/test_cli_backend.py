import pytest

from jaxrs_pipeline.backends.cli import CliBackend
from jaxrs_pipeline.backends.registry import PLAINTEXT, SWAGGER
from jaxrs_pipeline.core.errors import AnalysisFailure
from jaxrs_pipeline.domain.models import Project, Resources


def test_render_returns_engine_document():
    backend = CliBackend(SWAGGER)
    backend.configure({"swaggerSchemes": "https"})
    project = Project("shop", "2.0", Resources(document='{"swagger":"2.0"}', format="swagger"))

    assert backend.render(project) == '{"swagger":"2.0"}'
    assert backend.options == {"swaggerSchemes": "https"}


def test_render_rejects_document_for_other_backend():
    project = Project("shop", "2.0", Resources(document="GET /users", format="plaintext"))
    with pytest.raises(AnalysisFailure, match="expected swagger"):
        CliBackend(SWAGGER).render(project)


def test_name_is_descriptor_name():
    assert CliBackend(PLAINTEXT).name() == "plaintext"
