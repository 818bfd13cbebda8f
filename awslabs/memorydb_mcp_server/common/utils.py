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

"""General utility functions for the MemoryDB MCP Server."""

from botocore.exceptions import ClientError
from typing import Optional


def get_error_code(error: BaseException) -> Optional[str]:
    """Return the AWS error code of a botocore ClientError, or None for anything else."""
    if isinstance(error, ClientError):
        return error.response.get('Error', {}).get('Code')
    return None


def is_error_code(error: BaseException, code: str, message_contains: str = '') -> bool:
    """Check whether an error is a ClientError with the given code.

    Args:
        error: The error to inspect
        code: The expected AWS error code
        message_contains: Optional substring the error message must contain

    Returns:
        True if the error matches, False otherwise
    """
    if get_error_code(error) != code:
        return False
    if not message_contains:
        return True
    message = error.response.get('Error', {}).get('Message', '')  # type: ignore[attr-defined]
    return message_contains in message
