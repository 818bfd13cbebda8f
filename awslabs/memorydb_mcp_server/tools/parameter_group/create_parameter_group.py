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

"""Tool to create Amazon MemoryDB parameter groups."""

import asyncio
from ... import parameter_group
from ...common.connection import MemoryDBConnectionManager
from ...common.context import MemoryDBContext
from ...common.decorator import handle_exceptions, readonly_check
from ...common.server import mcp
from ...constants import DEFAULT_DESCRIPTION, SUCCESS_CREATED
from ...models import ParameterGroupConfig
from loguru import logger
from pydantic import Field
from typing import Any, Dict, List, Optional
from typing_extensions import Annotated


CREATE_PARAMETER_GROUP_TOOL_DESCRIPTION = """Create a new MemoryDB parameter group and apply its parameters.

<use_case>
Use this tool to create a custom parameter group for MemoryDB clusters, optionally setting
engine parameters that differ from the family defaults.
</use_case>

<important_notes>
1. Names are 1-255 lowercase letters, numbers, or hyphens, may not end with a hyphen and may not contain two consecutive hyphens
2. Provide either name or name_prefix, not both; with name_prefix a unique suffix is appended
3. The family (e.g. 'memorydb_redis7') determines which parameters are valid and cannot be changed later
4. The description cannot be changed later either
5. Parameters are applied 20 at a time after the group is created
6. When run with readonly=True (default), this operation is blocked
</important_notes>

## Response structure
Returns a dictionary with the following keys:
- `message`: Success message confirming the creation
- `parameter_group`: The state of the new group (name, arn, family, description, parameters, tags)

<examples>
Example usage scenarios:
1. Create a parameter group with an eviction policy:
   - name="cache-params"
   - family="memorydb_redis7"
   - parameters=[{"name": "maxmemory-policy", "value": "allkeys-lru"}]

2. Create a parameter group with a generated name:
   - name_prefix="sessions-"
   - family="memorydb_redis6"
   - tags={"Environment": "Production"}
</examples>
"""


@mcp.tool(
    name='CreateParameterGroup',
    description=CREATE_PARAMETER_GROUP_TOOL_DESCRIPTION,
)
@handle_exceptions
@readonly_check
async def create_memorydb_parameter_group(
    family: Annotated[
        str, Field(description='The engine version family of the group (e.g. memorydb_redis7)')
    ],
    name: Annotated[Optional[str], Field(description='The name of the parameter group')] = None,
    name_prefix: Annotated[
        Optional[str], Field(description='Creates a unique name beginning with this prefix')
    ] = None,
    description: Annotated[
        str, Field(description='The description of the parameter group')
    ] = DEFAULT_DESCRIPTION,
    parameters: Annotated[
        Optional[List[Dict[str, str]]],
        Field(description='Parameters to set, each with a name and a value'),
    ] = None,
    tags: Annotated[
        Optional[Dict[str, str]], Field(description='Tags to assign to the parameter group')
    ] = None,
) -> Dict[str, Any]:
    """Create a new MemoryDB parameter group.

    Args:
        family: The engine version family of the group
        name: The name of the parameter group
        name_prefix: Prefix for a generated name
        description: The description of the parameter group
        parameters: Parameters to set, each with a name and a value
        tags: Tags to assign to the parameter group

    Returns:
        Dict[str, Any]: The message and the state of the new group
    """
    config = ParameterGroupConfig(
        name=name,
        name_prefix=name_prefix,
        family=family,
        description=description,
        parameters=parameters or [],
        tags=tags or {},
    )

    client = MemoryDBConnectionManager.get_connection()

    logger.info(f'Creating MemoryDB parameter group in family {family}')
    state = await asyncio.to_thread(
        parameter_group.create_parameter_group,
        client,
        config,
        MemoryDBContext.default_tags(),
    )

    return {
        'message': SUCCESS_CREATED.format(f'MemoryDB parameter group {state.name}'),
        'parameter_group': state.model_dump(),
    }
