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

"""Tool to import an existing Amazon MemoryDB parameter group."""

import asyncio
from ... import parameter_group
from ...common.connection import MemoryDBConnectionManager
from ...common.context import MemoryDBContext
from ...common.decorator import handle_exceptions
from ...common.server import mcp
from ...constants import SUCCESS_IMPORTED
from pydantic import Field
from typing import Any, Dict
from typing_extensions import Annotated


IMPORT_PARAMETER_GROUP_TOOL_DESCRIPTION = """Import an existing MemoryDB parameter group by name.

<use_case>
Use this tool to start managing a parameter group that was created elsewhere. The response
contains a configuration that can be declared as-is to keep the group unchanged.
</use_case>

<important_notes>
1. The group is identified by its name only
2. Only parameters that differ from the family defaults are included
3. Importing a group that does not exist returns an error
</important_notes>

## Response structure
Returns a dictionary with the following keys:
- `message`: Success message confirming the import
- `parameter_group`: The state of the group
- `configuration`: The declared configuration equivalent to that state
"""


@mcp.tool(
    name='ImportParameterGroup',
    description=IMPORT_PARAMETER_GROUP_TOOL_DESCRIPTION,
)
@handle_exceptions
async def import_memorydb_parameter_group(
    name: Annotated[str, Field(description='The name of the parameter group')],
) -> Dict[str, Any]:
    """Import an existing MemoryDB parameter group."""
    client = MemoryDBConnectionManager.get_connection()

    state = await asyncio.to_thread(
        parameter_group.import_parameter_group, client, name, MemoryDBContext.default_tags()
    )

    return {
        'message': SUCCESS_IMPORTED.format(f'MemoryDB parameter group {name}'),
        'parameter_group': state.model_dump(),
        'configuration': state.to_config().model_dump(exclude_none=True),
    }
