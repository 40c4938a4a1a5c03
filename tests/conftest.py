import pathlib
import site

import pytest
from sqlfield.cache import SchemaCache

HERE = pathlib.Path(pathlib.Path(__file__).resolve()).parent
site.addsitedir(HERE)


@pytest.fixture(autouse=True)
def clear_caches():
    """Clear all caches before and after each test to ensure test isolation."""
    SchemaCache.get_instance().clear()
    yield
    SchemaCache.get_instance().clear()


pytest_plugins = [
    'tests.fixtures.fields',
    'tests.fixtures.values',
    'tests.fixtures.sqlite',
]
