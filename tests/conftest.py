import pathlib

import pytest

from protoval.toml_parser import load_schema

FIXTURES = pathlib.Path(__file__).parent / "fixtures"


@pytest.fixture
def types():
    return load_schema(FIXTURES / "messages.toml")
