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

"""Tests for describe_parameter_group tool."""

import pytest
from awslabs.memorydb_mcp_server.tools.parameter_group.describe_parameter_group import (
    describe_memorydb_parameter_group,
)
from conftest import GROUP_ARN, GROUP_NAME, make_client_error, not_found_error


class TestDescribeMemoryDBParameterGroup:
    """Test cases for describe_memorydb_parameter_group function."""

    @pytest.mark.asyncio
    async def test_describe_parameter_group(
        self, memorydb_group_client, mock_memorydb_context_readonly, no_default_tags
    ):
        """Test the effective state is returned, even in read-only mode."""
        result = await describe_memorydb_parameter_group(name=GROUP_NAME)

        assert result['message'] == f'Successfully retrieved MemoryDB parameter group {GROUP_NAME}'
        assert result['exists'] is True
        assert result['parameter_group']['arn'] == GROUP_ARN
        assert result['parameter_group']['parameters'] == [{'name': 'timeout', 'value': '300'}]

    @pytest.mark.asyncio
    async def test_describe_with_declared_parameters(
        self, memorydb_group_client, mock_memorydb_context_readonly, no_default_tags
    ):
        """Test declared parameters stay visible at their default value."""
        result = await describe_memorydb_parameter_group(
            name=GROUP_NAME,
            declared_parameters=[{'name': 'activedefrag', 'value': 'no'}],
        )

        assert result['parameter_group']['parameters'] == [
            {'name': 'timeout', 'value': '300'},
            {'name': 'activedefrag', 'value': 'no'},
        ]

    @pytest.mark.asyncio
    async def test_describe_default_tags_hidden(
        self, memorydb_group_client, mock_memorydb_context_readonly, no_default_tags
    ):
        """Test server default tags appear only in tags_all."""
        no_default_tags.return_value = {'Environment': 'Test'}

        result = await describe_memorydb_parameter_group(name=GROUP_NAME)

        assert result['parameter_group']['tags'] == {}
        assert result['parameter_group']['tags_all'] == {'Environment': 'Test'}

    @pytest.mark.asyncio
    async def test_describe_missing_group(
        self, mock_memorydb_client, mock_memorydb_context_readonly, no_default_tags
    ):
        """Test a group that no longer exists is reported as gone."""
        mock_memorydb_client.describe_parameter_groups.side_effect = not_found_error()

        result = await describe_memorydb_parameter_group(name=GROUP_NAME)

        assert result['exists'] is False
        assert result['parameter_group'] is None

    @pytest.mark.asyncio
    async def test_describe_client_error(
        self, mock_memorydb_client, mock_memorydb_context_readonly, no_default_tags
    ):
        """Test a remote failure is returned as an error payload."""
        mock_memorydb_client.describe_parameter_groups.side_effect = make_client_error(
            'AccessDeniedException', 'User is not authorized'
        )

        result = await describe_memorydb_parameter_group(name=GROUP_NAME)

        assert result['error'] == 'Operation failed: reading'
        assert result['error_code'] == 'AccessDeniedException'
