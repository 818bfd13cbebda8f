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

"""Tool to update the parameters and tags of an Amazon MemoryDB parameter group."""

import asyncio
from ... import parameter_group
from ...common.connection import MemoryDBConnectionManager
from ...common.context import MemoryDBContext
from ...common.decorator import handle_exceptions, readonly_check
from ...common.server import mcp
from ...constants import DEFAULT_DESCRIPTION, SUCCESS_MODIFIED
from ...models import ParameterGroupConfig
from loguru import logger
from pydantic import Field
from typing import Any, Dict, List, Optional
from typing_extensions import Annotated


UPDATE_PARAMETER_GROUP_TOOL_DESCRIPTION = """Move a MemoryDB parameter group from its previous declared parameters to new ones.

<use_case>
Use this tool to change the parameters or tags of an existing parameter group. Pass both the
previously declared parameters and the newly declared ones; only the differences are sent.
</use_case>

<important_notes>
1. Parameters present in previous_parameters but missing from parameters are reset to the family default
2. New parameters and parameters whose value changed are applied
3. Changes are sent at most 20 parameters per call; a failure part way does not undo earlier calls
4. Resets are retried for up to 30 seconds while the group has pending changes
5. The family and description cannot be changed in place; pass previous_family or
   previous_description only to check whether a replacement is needed
6. When run with readonly=True (default), this operation is blocked
</important_notes>

## Response structure
Returns a dictionary with the following keys:
- `message`: Success message confirming the update
- `exists`: Whether the parameter group still exists after the update
- `parameter_group`: The state of the group after the update, or null
"""


@mcp.tool(
    name='UpdateParameterGroup',
    description=UPDATE_PARAMETER_GROUP_TOOL_DESCRIPTION,
)
@handle_exceptions
@readonly_check
async def update_memorydb_parameter_group(
    name: Annotated[str, Field(description='The name of the parameter group')],
    family: Annotated[str, Field(description='The engine version family of the group')],
    parameters: Annotated[
        Optional[List[Dict[str, str]]],
        Field(description='The newly declared parameters, each with a name and a value'),
    ] = None,
    previous_parameters: Annotated[
        Optional[List[Dict[str, str]]],
        Field(description='The previously declared parameters, each with a name and a value'),
    ] = None,
    tags: Annotated[
        Optional[Dict[str, str]], Field(description='The newly declared tags')
    ] = None,
    previous_tags: Annotated[
        Optional[Dict[str, str]], Field(description='The previously declared tags')
    ] = None,
    description: Annotated[
        str, Field(description='The description of the parameter group')
    ] = DEFAULT_DESCRIPTION,
    previous_family: Annotated[
        Optional[str], Field(description='The previously declared family, if it differs')
    ] = None,
    previous_description: Annotated[
        Optional[str], Field(description='The previously declared description, if it differs')
    ] = None,
) -> Dict[str, Any]:
    """Update a MemoryDB parameter group.

    Args:
        name: The name of the parameter group
        family: The engine version family of the group
        parameters: The newly declared parameters
        previous_parameters: The previously declared parameters
        tags: The newly declared tags
        previous_tags: The previously declared tags
        description: The description of the parameter group
        previous_family: The previously declared family
        previous_description: The previously declared description

    Returns:
        Dict[str, Any]: The message and the state of the group after the update
    """
    old = ParameterGroupConfig(
        name=name,
        family=previous_family or family,
        description=previous_description if previous_description is not None else description,
        parameters=previous_parameters or [],
        tags=previous_tags or {},
    )
    new = ParameterGroupConfig(
        name=name,
        family=family,
        description=description,
        parameters=parameters or [],
        tags=tags or {},
    )

    client = MemoryDBConnectionManager.get_connection()

    logger.info(f'Updating MemoryDB parameter group {name}')
    state = await asyncio.to_thread(
        parameter_group.update_parameter_group,
        client,
        name,
        old,
        new,
        MemoryDBContext.default_tags(),
    )

    return {
        'message': SUCCESS_MODIFIED.format(f'MemoryDB parameter group {name}'),
        'exists': state is not None,
        'parameter_group': state.model_dump() if state is not None else None,
    }
