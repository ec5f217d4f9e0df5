"""
Pytest Configuration and Fixtures
===================================
Shared fixtures and configuration for all tests
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add server directory to path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))


@pytest.fixture
def test_config():
    """Configuration built from defaults, independent of settings.yaml"""
    from config import Config

    return Config({
        'server': {
            'authentication': {
                'enabled': True,
                'api_keys': {},
            },
        },
    })


@pytest.fixture
def sample_api_keys():
    """Sample API keys for testing"""
    return {
        'admin-test-key-123': {
            'name': 'test-admin',
            'role': 'admin',
        },
        'user-test-key-123': {
            'name': 'test-user',
            'role': 'user',
        },
    }


@pytest.fixture
def mock_request():
    """Mock Starlette request object"""
    class MockClient:
        host = "127.0.0.1"

    class MockState:
        pass

    class MockHeaders:
        def __init__(self):
            self._headers = {}

        def get(self, key, default=None):
            return self._headers.get(key.lower(), default)

        def set(self, key, value):
            self._headers[key.lower()] = value

    class MockURL:
        path = "/mcp"

    class MockRequest:
        def __init__(self):
            self.client = MockClient()
            self.state = MockState()
            self.headers = MockHeaders()
            self.url = MockURL()
            self.method = "POST"

    return MockRequest()


@pytest_asyncio.fixture
async def server_wrapper():
    """Running template server behind the stdio test wrapper"""
    from server import create_server
    from testing import MCPServerTestWrapper

    wrapper = MCPServerTestWrapper(create_server, poll_interval_seconds=0.01, response_timeout=10)
    await wrapper.start()
    yield wrapper
    await wrapper.close()
