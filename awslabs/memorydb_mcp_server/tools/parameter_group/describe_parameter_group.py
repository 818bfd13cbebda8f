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

"""Tool to describe the effective state of an Amazon MemoryDB parameter group."""

import asyncio
from ... import parameter_group
from ...common.connection import MemoryDBConnectionManager
from ...common.context import MemoryDBContext
from ...common.decorator import handle_exceptions
from ...common.server import mcp
from ...constants import SUCCESS_READ
from ...models import Parameter
from loguru import logger
from pydantic import Field
from typing import Any, Dict, List, Optional
from typing_extensions import Annotated


DESCRIBE_PARAMETER_GROUP_TOOL_DESCRIPTION = """Describe a MemoryDB parameter group and its effective parameters.

<use_case>
Use this tool to read the current state of a parameter group, for example to detect drift
between the declared parameters and what MemoryDB actually holds.
</use_case>

<important_notes>
1. Only parameters whose value differs from the family default are returned
2. Parameters listed in declared_parameters are returned even when they equal the default
3. Parameter names are returned in lowercase
4. If the group no longer exists, `exists` is false instead of an error being returned
</important_notes>

## Response structure
Returns a dictionary with the following keys:
- `message`: Status message
- `exists`: Whether the parameter group exists
- `parameter_group`: The state of the group (name, arn, family, description, parameters, tags), or null
"""


@mcp.tool(
    name='DescribeParameterGroup',
    description=DESCRIBE_PARAMETER_GROUP_TOOL_DESCRIPTION,
)
@handle_exceptions
async def describe_memorydb_parameter_group(
    name: Annotated[str, Field(description='The name of the parameter group')],
    declared_parameters: Annotated[
        Optional[List[Dict[str, str]]],
        Field(description='Parameters declared for the group, each with a name and a value'),
    ] = None,
) -> Dict[str, Any]:
    """Describe a MemoryDB parameter group.

    Args:
        name: The name of the parameter group
        declared_parameters: Parameters declared for the group

    Returns:
        Dict[str, Any]: The message and the state of the group
    """
    declared = [Parameter(**item) for item in declared_parameters or []]
    client = MemoryDBConnectionManager.get_connection()

    logger.info(f'Describing MemoryDB parameter group {name}')
    state = await asyncio.to_thread(
        parameter_group.read_parameter_group,
        client,
        name,
        declared,
        MemoryDBContext.default_tags(),
    )

    if state is None:
        return {
            'message': f'MemoryDB parameter group {name} no longer exists',
            'exists': False,
            'parameter_group': None,
        }

    return {
        'message': SUCCESS_READ.format(f'MemoryDB parameter group {name}'),
        'exists': True,
        'parameter_group': state.model_dump(),
    }
