# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Global pytest fixtures for MemoryDB MCP Server tests."""

import os
import pytest
from awslabs.memorydb_mcp_server.common.connection import MemoryDBConnectionManager
from awslabs.memorydb_mcp_server.common.context import MemoryDBContext
from botocore.exceptions import ClientError
from unittest.mock import MagicMock, patch


GROUP_NAME = 'test-parameter-group'
GROUP_ARN = 'arn:aws:memorydb:us-east-1:123456789012:parametergroup/test-parameter-group'
FAMILY = 'memorydb_redis7'
DEFAULT_GROUP_NAME = 'default.memorydb-redis7'


def make_client_error(code: str, message: str = '', operation: str = 'Operation') -> ClientError:
    """Build a botocore ClientError with the given code and message."""
    return ClientError({'Error': {'Code': code, 'Message': message}}, operation)


def pending_changes_error() -> ClientError:
    """The transient conflict MemoryDB raises while earlier changes propagate."""
    return make_client_error(
        'InvalidParameterGroupStateFault',
        f'Parameter group {GROUP_NAME} has pending changes.',
        'ResetParameterGroup',
    )


def not_found_error(operation: str = 'DescribeParameterGroups') -> ClientError:
    """The error MemoryDB raises for an unknown parameter group."""
    return make_client_error(
        'ParameterGroupNotFoundFault', f'Parameter group {GROUP_NAME} not found', operation
    )


def describe_parameters_by_group(parameters_by_group):
    """Side effect for describe_parameters serving fixed listings per group name."""

    def describe_parameters(ParameterGroupName, **kwargs):
        if ParameterGroupName not in parameters_by_group:
            raise not_found_error('DescribeParameters')
        return {
            'Parameters': [
                {'Name': name, 'Value': value}
                for name, value in parameters_by_group[ParameterGroupName].items()
            ]
        }

    return describe_parameters


@pytest.fixture(scope='session', autouse=True)
def tests_setup_and_teardown():
    """Mock environment and module variables for testing."""
    old_environ = dict(os.environ)
    os.environ.update(
        {
            'AWS_DEFAULT_REGION': 'us-east-1',  # pragma: allowlist secret
            'AWS_ACCESS_KEY_ID': 'mock_access_key',  # pragma: allowlist secret
            'AWS_SECRET_ACCESS_KEY': 'mock_secret_key',  # pragma: allowlist secret
        }
    )

    yield

    os.environ.clear()
    os.environ.update(old_environ)


@pytest.fixture
def mock_memorydb_client():
    """Fixture providing a mock MemoryDB client for tests.

    Resets the MemoryDB connection before and after the test.
    Returns a mock client that's automatically patched into the MemoryDBConnectionManager.
    """
    MemoryDBConnectionManager._client = None

    mock_client = MagicMock()

    with patch.object(MemoryDBConnectionManager, 'get_connection', return_value=mock_client):
        yield mock_client

    MemoryDBConnectionManager._client = None


@pytest.fixture
def mock_memorydb_context_allowed():
    """Mock MemoryDB context to allow operations (readonly_mode returns False)."""
    with patch.object(MemoryDBContext, 'readonly_mode', return_value=False) as mock:
        yield mock


@pytest.fixture
def mock_memorydb_context_readonly():
    """Mock MemoryDB context to deny operations (readonly_mode returns True)."""
    with patch.object(MemoryDBContext, 'readonly_mode', return_value=True) as mock:
        yield mock


@pytest.fixture
def no_default_tags():
    """Make sure no server default tags leak into a test."""
    with patch.object(MemoryDBContext, 'default_tags', return_value={}) as mock:
        yield mock


@pytest.fixture
def no_sleep():
    """Skip the backoff delay between reset retries."""
    with patch('awslabs.memorydb_mcp_server.reconcile.time.sleep') as mock:
        yield mock


@pytest.fixture
def sample_parameter_group():
    """Return a sample DescribeParameterGroups entry."""
    return {
        'Name': GROUP_NAME,
        'Family': FAMILY,
        'Description': 'Test parameter group',
        'ARN': GROUP_ARN,
    }


@pytest.fixture
def memorydb_group_client(mock_memorydb_client, sample_parameter_group):
    """Mock client serving one existing parameter group.

    Family defaults: maxmemory-policy=noeviction, timeout=0, activedefrag=no.
    The group overrides timeout=300.
    """
    mock_memorydb_client.describe_parameter_groups.return_value = {
        'ParameterGroups': [sample_parameter_group]
    }
    mock_memorydb_client.describe_parameters.side_effect = describe_parameters_by_group(
        {
            DEFAULT_GROUP_NAME: {
                'maxmemory-policy': 'noeviction',
                'timeout': '0',
                'activedefrag': 'no',
            },
            GROUP_NAME: {
                'maxmemory-policy': 'noeviction',
                'timeout': '300',
                'activedefrag': 'no',
            },
        }
    )
    mock_memorydb_client.list_tags.return_value = {
        'TagList': [{'Key': 'Environment', 'Value': 'Test'}]
    }
    mock_memorydb_client.create_parameter_group.return_value = {
        'ParameterGroup': sample_parameter_group
    }
    return mock_memorydb_client
