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

"""Tests for create_parameter_group tool."""

import pytest
from awslabs.memorydb_mcp_server.tools.parameter_group.create_parameter_group import (
    create_memorydb_parameter_group,
)
from conftest import FAMILY, GROUP_NAME, make_client_error


class TestCreateMemoryDBParameterGroup:
    """Test cases for create_memorydb_parameter_group function."""

    @pytest.mark.asyncio
    async def test_create_parameter_group_success(
        self, memorydb_group_client, mock_memorydb_context_allowed, no_default_tags
    ):
        """Test successful parameter group creation."""
        result = await create_memorydb_parameter_group(
            family=FAMILY,
            name=GROUP_NAME,
            description='Test parameter group',
            parameters=[{'name': 'timeout', 'value': '300'}],
            tags={'Environment': 'Test'},
        )

        assert result['message'] == f'Successfully created MemoryDB parameter group {GROUP_NAME}'
        assert result['parameter_group']['name'] == GROUP_NAME
        assert result['parameter_group']['parameters'] == [{'name': 'timeout', 'value': '300'}]
        assert result['parameter_group']['tags'] == {'Environment': 'Test'}
        memorydb_group_client.create_parameter_group.assert_called_once_with(
            ParameterGroupName=GROUP_NAME,
            Family=FAMILY,
            Description='Test parameter group',
            Tags=[{'Key': 'Environment', 'Value': 'Test'}],
        )

    @pytest.mark.asyncio
    async def test_create_parameter_group_with_default_tags(
        self, memorydb_group_client, mock_memorydb_context_allowed, no_default_tags
    ):
        """Test server default tags are added to the new group."""
        no_default_tags.return_value = {'Owner': 'platform'}

        await create_memorydb_parameter_group(family=FAMILY, name=GROUP_NAME)

        kwargs = memorydb_group_client.create_parameter_group.call_args.kwargs
        assert kwargs['Tags'] == [{'Key': 'Owner', 'Value': 'platform'}]

    @pytest.mark.asyncio
    async def test_create_parameter_group_readonly(
        self, mock_memorydb_client, mock_memorydb_context_readonly
    ):
        """Test creation is blocked in read-only mode."""
        result = await create_memorydb_parameter_group(family=FAMILY, name=GROUP_NAME)

        assert 'read-only mode' in result['error']
        assert result['operation'] == 'create_memorydb_parameter_group'
        mock_memorydb_client.create_parameter_group.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_parameter_group_invalid_name(
        self, mock_memorydb_client, mock_memorydb_context_allowed
    ):
        """Test an invalid name is reported before any call is made."""
        result = await create_memorydb_parameter_group(family=FAMILY, name='Invalid_Name')

        assert result['error'].startswith('Invalid parameters')
        mock_memorydb_client.create_parameter_group.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_parameter_group_name_and_prefix(
        self, mock_memorydb_client, mock_memorydb_context_allowed
    ):
        """Test name and name_prefix together are rejected."""
        result = await create_memorydb_parameter_group(
            family=FAMILY, name=GROUP_NAME, name_prefix='test-'
        )

        assert 'validation_errors' in result
        assert 'conflicts' in result['validation_errors'][0]['message']

    @pytest.mark.asyncio
    async def test_create_parameter_group_client_error(
        self, mock_memorydb_client, mock_memorydb_context_allowed, no_default_tags
    ):
        """Test a remote failure is returned as an error payload."""
        mock_memorydb_client.create_parameter_group.side_effect = make_client_error(
            'ParameterGroupAlreadyExistsFault', 'Parameter group already exists'
        )

        result = await create_memorydb_parameter_group(family=FAMILY, name=GROUP_NAME)

        assert result['error'] == 'Operation failed: creating'
        assert result['error_code'] == 'ParameterGroupAlreadyExistsFault'
        assert result['identifier'] == GROUP_NAME
