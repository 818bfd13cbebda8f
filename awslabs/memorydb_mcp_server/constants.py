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

"""Constants for MemoryDB MCP Server."""

# Version
MCP_SERVER_VERSION = '0.1.0'

# Error Messages
ERROR_READONLY_MODE = (
    'This operation requires write access. The server is currently in read-only mode.'
)
ERROR_CLIENT = 'Client error: {}'
ERROR_INVALID_PARAMS = 'Invalid parameters: {}'
ERROR_UNEXPECTED = 'Unexpected error: {}'
ERROR_NOT_FOUND = 'Resource not found: {}'
ERROR_OPERATION_FAILED = 'Operation failed: {}'
ERROR_REPLACEMENT_REQUIRED = 'Replacement required: {}'

# Success Messages
SUCCESS_CREATED = 'Successfully created {}'
SUCCESS_MODIFIED = 'Successfully modified {}'
SUCCESS_DELETED = 'Successfully deleted {}'
SUCCESS_IMPORTED = 'Successfully imported {}'
SUCCESS_READ = 'Successfully retrieved {}'

# MemoryDB error codes
ERROR_CODE_PARAMETER_GROUP_NOT_FOUND = 'ParameterGroupNotFoundFault'
ERROR_CODE_INVALID_PARAMETER_GROUP_STATE = 'InvalidParameterGroupStateFault'
PENDING_CHANGES_MESSAGE = ' has pending changes'

# The API is limited to updating no more than 20 parameters at a time.
MAX_PARAMETERS_PER_CALL = 20

# Reset retry budget (seconds) while a group has pending changes
RESET_RETRY_TIMEOUT = 30
RESET_RETRY_MIN_DELAY = 0.5
RESET_RETRY_MAX_DELAY = 10

# Parameter group defaults
DEFAULT_DESCRIPTION = 'Managed by MCP'
DEFAULT_PARAMETER_GROUP_PREFIX = 'default.'
DEFAULT_NAME_PREFIX = 'mcp-'
MAX_NAME_LENGTH = 255
UNIQUE_ID_SUFFIX_LENGTH = 26

# Tags carrying this prefix are owned by AWS and never managed here
AWS_TAG_PREFIX = 'aws:'
