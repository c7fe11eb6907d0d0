from pathlib import Path

import pytest

from clientgen.builders import BuilderRegistry
from clientgen.ir import HttpMethod, ResourceAction, TypeReference
from clientgen.orchestrator import TypeDefinitionOrchestrator
from clientgen.source import load_specification

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture
def transfer_spec_path():
    """Path of the sample transfer API document."""
    return FIXTURES_DIR / "transfer" / "api.raml"


@pytest.fixture
def transfer_specification(transfer_spec_path):
    return load_specification(transfer_spec_path)


@pytest.fixture
def transfer_definitions(transfer_specification):
    """Type Definitions built from the sample document with the default registry."""
    orchestrator = TypeDefinitionOrchestrator(BuilderRegistry.default())
    return orchestrator.build_type_definitions(transfer_specification)


@pytest.fixture
def make_action():
    """Factory for resource actions with sensible defaults."""

    def _make(method="GET", path="/transfers", client="Transfer", request=None, response=None, **kwargs):
        return ResourceAction(
            client=client,
            method=HttpMethod(method),
            path=path,
            request_type=TypeReference.to_type(request) if isinstance(request, str) else request,
            response_type=TypeReference.to_type(response) if isinstance(response, str) else response,
            **kwargs,
        )

    return _make
