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

"""Custom exceptions for the MemoryDB MCP Server."""

from typing import List


class MemoryDBMCPException(Exception):
    """Base exception for MemoryDB MCP Server."""

    pass


class ReadOnlyModeException(MemoryDBMCPException):
    """Exception raised when a write operation is attempted in read-only mode."""

    def __init__(self, operation: str):
        """Initialize the ReadOnlyModeException.

        Args:
            operation: The name of the operation that was attempted
        """
        self.operation = operation
        super().__init__(
            f"Operation '{operation}' requires write access. The server is currently in read-only mode."
        )


class ParameterGroupNotFoundException(MemoryDBMCPException):
    """Exception raised when a parameter group does not exist."""

    def __init__(self, name: str):
        """Initialize the ParameterGroupNotFoundException.

        Args:
            name: The name of the parameter group that could not be found
        """
        self.name = name
        super().__init__(f'MemoryDB Parameter Group ({name}) not found')


class ReplacementRequiredException(MemoryDBMCPException):
    """Exception raised when an immutable attribute is changed in place."""

    def __init__(self, name: str, fields: List[str]):
        """Initialize the ReplacementRequiredException.

        Args:
            name: The name of the parameter group
            fields: The immutable fields whose values changed
        """
        self.name = name
        self.fields = fields
        super().__init__(
            f'MemoryDB Parameter Group ({name}) cannot be updated in place, '
            f'changing {", ".join(fields)} requires replacing the group'
        )


class OperationFailedException(MemoryDBMCPException):
    """Exception raised when a remote call fails, naming the operation and resource."""

    def __init__(self, operation: str, identifier: str, error: Exception):
        """Initialize the OperationFailedException.

        Args:
            operation: Short description of what was being done (e.g. 'creating')
            identifier: The resource identifier the operation targeted
            error: The underlying error
        """
        self.operation = operation
        self.identifier = identifier
        self.error = error
        super().__init__(f'error {operation} MemoryDB Parameter Group ({identifier}): {error}')
