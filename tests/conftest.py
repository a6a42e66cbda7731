"""
Shared fixtures for the test suite
"""

# Third Party
import pytest

# Local
from cloudprovision.config import get_config
from cloudprovision.resources.container import ContainerResource
from tests.helpers import memory_factory


@pytest.fixture(autouse=True)
def restore_config():
    """Leave the module configuration as it was before each test"""
    saved = dict(get_config())
    yield get_config()
    get_config().clear()
    get_config().update(saved)


@pytest.fixture
def factory_and_services():
    return memory_factory()


@pytest.fixture
def service(factory_and_services):
    return factory_and_services[1]["RegionOne"]


@pytest.fixture
def resource(factory_and_services):
    return ContainerResource(factory_and_services[0])
