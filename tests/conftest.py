from dataclasses import replace

import pytest

from areascan.config import APIConfig, PipelineConfig
from tests.helpers import FakeSource


@pytest.fixture
def config():
    """Default tables, no sleeping between requests"""
    return replace(
        PipelineConfig(),
        api=APIConfig(min_request_interval=0.0, retry_delay=0.0),
    )


@pytest.fixture
def make_source(config):
    def factory(**responses):
        return FakeSource(config, responses)
    return factory
