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

"""Decorators used by the MemoryDB MCP Server."""

from ..constants import (
    ERROR_CLIENT,
    ERROR_INVALID_PARAMS,
    ERROR_NOT_FOUND,
    ERROR_OPERATION_FAILED,
    ERROR_READONLY_MODE,
    ERROR_REPLACEMENT_REQUIRED,
    ERROR_UNEXPECTED,
)
from ..exceptions import (
    OperationFailedException,
    ParameterGroupNotFoundException,
    ReadOnlyModeException,
    ReplacementRequiredException,
)
from .context import MemoryDBContext
from botocore.exceptions import ClientError
from functools import wraps
from inspect import iscoroutinefunction
from loguru import logger
from pydantic import ValidationError
from typing import Any, Callable, Dict


READ_OPERATION_PREFIXES = ('describe', 'list', 'get', 'read', 'import')


def _client_error_details(error: ClientError) -> Dict[str, str]:
    return {
        'error_code': error.response.get('Error', {}).get('Code', 'Unknown'),
        'error_message': error.response.get('Error', {}).get('Message', str(error)),
    }


def handle_exceptions(func: Callable) -> Callable:
    """Decorator to handle exceptions in MCP operations.

    Wraps the function in a try-catch block and returns any exceptions
    in a standardized error format.

    Args:
        func: The function to wrap

    Returns:
        The wrapped function that handles exceptions
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any):
        try:
            if iscoroutinefunction(func):
                return await func(*args, **kwargs)
            return func(*args, **kwargs)
        except ReadOnlyModeException as error:
            logger.warning(f'Operation blocked in readonly mode: {error.operation}')
            return {
                'error': ERROR_READONLY_MODE,
                'operation': error.operation,
                'message': str(error),
            }
        except ParameterGroupNotFoundException as error:
            logger.error(str(error))
            return {
                'error': ERROR_NOT_FOUND.format(error.name),
                'error_message': str(error),
                'operation': func.__name__,
            }
        except ReplacementRequiredException as error:
            logger.error(str(error))
            return {
                'error': ERROR_REPLACEMENT_REQUIRED.format(', '.join(error.fields)),
                'fields': error.fields,
                'error_message': str(error),
                'operation': func.__name__,
            }
        except OperationFailedException as error:
            logger.error(f'Failed {error.operation} {error.identifier}: {error.error}')
            result = {
                'error': ERROR_OPERATION_FAILED.format(error.operation),
                'identifier': error.identifier,
                'error_message': str(error),
                'operation': func.__name__,
            }
            if isinstance(error.error, ClientError):
                result['error_code'] = _client_error_details(error.error)['error_code']
            return result
        except ValidationError as error:
            logger.error(f'Invalid parameters for {func.__name__}: {error}')
            validation_errors = [
                {'location': '.'.join(str(part) for part in item['loc']), 'message': item['msg']}
                for item in error.errors()
            ]
            return {
                'error': ERROR_INVALID_PARAMS.format(
                    ', '.join(item['location'] or 'configuration' for item in validation_errors)
                ),
                'validation_errors': validation_errors,
                'operation': func.__name__,
            }
        except ClientError as error:
            details = _client_error_details(error)
            logger.error(
                f'Failed with client error {details["error_code"]}: {details["error_message"]}'
            )
            return {
                'error': ERROR_CLIENT.format(details['error_code']),
                **details,
                'operation': func.__name__,
            }
        except Exception as error:
            logger.exception(f'Failed with unexpected error: {str(error)}')
            return {
                'error': ERROR_UNEXPECTED.format(str(error)),
                'error_type': type(error).__name__,
                'error_message': str(error),
                'operation': func.__name__,
            }

    return wrapper


def readonly_check(func: Callable) -> Callable:
    """Decorator to check if operation is allowed in readonly mode.

    The operation type is derived from the function name: anything that does
    not start with a read prefix is treated as mutating.

    Args:
        func: The function to wrap

    Returns:
        The wrapped function that checks readonly mode
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any):
        is_read_operation = func.__name__.lower().startswith(READ_OPERATION_PREFIXES)

        if not is_read_operation and MemoryDBContext.readonly_mode():
            raise ReadOnlyModeException(func.__name__)

        if iscoroutinefunction(func):
            return await func(*args, **kwargs)
        return func(*args, **kwargs)

    return wrapper
