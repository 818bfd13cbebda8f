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

"""Tool to delete an Amazon MemoryDB parameter group."""

import asyncio
from ... import parameter_group
from ...common.connection import MemoryDBConnectionManager
from ...common.decorator import handle_exceptions, readonly_check
from ...common.server import mcp
from ...constants import SUCCESS_DELETED
from pydantic import Field
from typing import Any, Dict
from typing_extensions import Annotated


DELETE_PARAMETER_GROUP_TOOL_DESCRIPTION = """Delete a MemoryDB parameter group.

<important_notes>
1. Deleting a parameter group that does not exist succeeds
2. A parameter group that is still attached to a cluster cannot be deleted
3. When run with readonly=True (default), this operation is blocked
</important_notes>
"""


@mcp.tool(
    name='DeleteParameterGroup',
    description=DELETE_PARAMETER_GROUP_TOOL_DESCRIPTION,
)
@handle_exceptions
@readonly_check
async def delete_memorydb_parameter_group(
    name: Annotated[str, Field(description='The name of the parameter group')],
) -> Dict[str, Any]:
    """Delete a MemoryDB parameter group."""
    client = MemoryDBConnectionManager.get_connection()

    await asyncio.to_thread(parameter_group.delete_parameter_group, client, name)

    return {'message': SUCCESS_DELETED.format(f'MemoryDB parameter group {name}')}
