import pytest

from packages.sms_parser.pipeline import ExtractionPipeline
from packages.sms_parser.registry import build_default_registry


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def pipeline(registry):
    return ExtractionPipeline(registry)
