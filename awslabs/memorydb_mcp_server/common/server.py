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

"""Common MCP server configuration."""

from mcp.server.fastmcp import FastMCP


SERVER_INSTRUCTIONS = """
This server manages Amazon MemoryDB parameter groups as declarative resources.

Key capabilities:
- Create a parameter group and apply its declared parameters
- Describe a parameter group, showing only parameters that differ from the family defaults or were declared
- Update declared parameters: removed parameters are reset to their defaults, new or changed ones are applied
- Delete a parameter group (deleting a group that no longer exists succeeds)
- Import an existing parameter group by name

The server operates in read-only mode by default for safety. Write operations require explicit configuration.

Description and family cannot be changed in place; changing them requires replacing the group.
"""

SERVER_DEPENDENCIES = ['boto3', 'botocore', 'pydantic', 'loguru']

# FastMCP instance
mcp = FastMCP(
    'awslabs.memorydb-mcp-server',
    instructions=SERVER_INSTRUCTIONS,
    dependencies=SERVER_DEPENDENCIES,
)
