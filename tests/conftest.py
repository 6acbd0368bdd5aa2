"""
Shared test fixtures and configuration.
"""

import pytest

from protoc_gen_swift.codegen.core.config import GeneratorOptions


@pytest.fixture
def options() -> GeneratorOptions:
    """Default generator options."""
    return GeneratorOptions()
