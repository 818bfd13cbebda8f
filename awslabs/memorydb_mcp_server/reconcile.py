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

"""Reconciliation of declared parameters against a MemoryDB parameter group.

Three pieces live here:

- the differencer, which turns an old and a new declared parameter set into
  parameters to reset and parameters to apply;
- the batched applier, which sends those lists to MemoryDB at most
  ``MAX_PARAMETERS_PER_CALL`` at a time;
- the effective-state lister, which reads a group back and keeps only the
  parameters worth showing: those that differ from the family defaults or
  that the user declared.
"""

import time
from .common.utils import is_error_code
from .constants import (
    DEFAULT_PARAMETER_GROUP_PREFIX,
    ERROR_CODE_INVALID_PARAMETER_GROUP_STATE,
    MAX_PARAMETERS_PER_CALL,
    PENDING_CHANGES_MESSAGE,
    RESET_RETRY_MAX_DELAY,
    RESET_RETRY_MIN_DELAY,
    RESET_RETRY_TIMEOUT,
)
from .exceptions import OperationFailedException
from .models import Parameter, ParameterChanges
from botocore.client import BaseClient
from botocore.exceptions import ClientError
from loguru import logger
from typing import (
    AbstractSet,
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
    Union,
)


T = TypeVar('T')

ParameterSet = Union[Mapping[str, str], Iterable[Parameter], None]


def diff_name_values(
    old: Iterable[T],
    new: Iterable[T],
    name_of: Callable[[T], str],
    value_of: Callable[[T], Any],
) -> Tuple[List[T], List[T]]:
    """Compare two collections of named values.

    Entries are keyed by ``name_of``; when a name repeats, the last entry wins.

    Args:
        old: The previous collection
        new: The desired collection
        name_of: Returns the name of an entry
        value_of: Returns the value of an entry

    Returns:
        A tuple ``(removed, added_or_updated)``: entries of ``old`` whose name is
        missing from ``new``, and entries of ``new`` whose name is missing from
        ``old`` or whose value changed. Both are sorted by name.
    """
    old_by_name = {name_of(item): item for item in old}
    new_by_name = {name_of(item): item for item in new}

    removed = [old_by_name[name] for name in sorted(old_by_name) if name not in new_by_name]
    added_or_updated = [
        new_by_name[name]
        for name in sorted(new_by_name)
        if name not in old_by_name or value_of(old_by_name[name]) != value_of(new_by_name[name])
    ]

    return removed, added_or_updated


def as_parameters(parameters: ParameterSet) -> List[Parameter]:
    """Normalise a name to value mapping or Parameter entries into a list of Parameter."""
    if parameters is None:
        return []
    if isinstance(parameters, Mapping):
        return [Parameter(name=name, value=value) for name, value in parameters.items()]
    return list(parameters)


def diff_parameters(old: ParameterSet, new: ParameterSet) -> ParameterChanges:
    """Work out which parameters to reset and which to add or update.

    Args:
        old: Previously declared parameters, as a name to value mapping or Parameter entries
        new: Newly declared parameters, in the same shapes

    Returns:
        ParameterChanges whose ``to_reset`` holds names declared before but not now,
        and whose ``to_apply`` holds new or changed parameters, both ordered by name
    """
    removed, added_or_updated = diff_name_values(
        as_parameters(old),
        as_parameters(new),
        name_of=lambda parameter: parameter.name,
        value_of=lambda parameter: parameter.value,
    )
    return ParameterChanges(
        to_reset=[parameter.name for parameter in removed],
        to_apply=added_or_updated,
    )


def batched(items: Sequence[T], size: int = MAX_PARAMETERS_PER_CALL) -> Iterator[List[T]]:
    """Yield consecutive slices of at most ``size`` items."""
    if size < 1:
        raise ValueError('Batch size must be at least 1')

    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def is_pending_changes_error(error: BaseException) -> bool:
    """Check for the transient conflict raised while earlier changes to a group propagate."""
    return is_error_code(
        error, ERROR_CODE_INVALID_PARAMETER_GROUP_STATE, message_contains=PENDING_CHANGES_MESSAGE
    )


def _reset_batch(client: BaseClient, group_name: str, names: List[str], timeout: float) -> int:
    deadline = time.monotonic() + timeout
    delay = RESET_RETRY_MIN_DELAY
    attempt = 0

    while True:
        attempt += 1
        try:
            client.reset_parameter_group(ParameterGroupName=group_name, ParameterNames=names)
            return attempt
        except ClientError as error:
            if not is_pending_changes_error(error):
                raise

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.warning(
                    f'MemoryDB Parameter Group ({group_name}) still has pending changes '
                    f'after {attempt} attempts, giving up'
                )
                raise

            wait = min(delay, remaining)
            logger.warning(
                f'MemoryDB Parameter Group ({group_name}) has pending changes, '
                f'retrying reset in {wait:.1f}s'
            )
            time.sleep(wait)
            delay = min(delay * 2, RESET_RETRY_MAX_DELAY)


def reset_parameters(
    client: BaseClient,
    group_name: str,
    names: Sequence[str],
    timeout: float = RESET_RETRY_TIMEOUT,
) -> int:
    """Reset parameters to their family defaults, in batches.

    Each batch is retried while the group reports pending changes, for at most
    ``timeout`` seconds. Any other error stops immediately; batches already
    sent are not rolled back.

    Args:
        client: MemoryDB client
        group_name: The name of the parameter group
        names: Names of the parameters to reset
        timeout: Retry budget in seconds for each batch

    Returns:
        The total number of ResetParameterGroup calls made
    """
    calls = 0
    for batch in batched(list(names)):
        logger.info(f'Resetting {len(batch)} parameters in MemoryDB Parameter Group {group_name}')
        calls += _reset_batch(client, group_name, batch, timeout)
    return calls


def update_parameters(
    client: BaseClient, group_name: str, parameters: Sequence[Parameter]
) -> int:
    """Set parameter values, in batches, without retrying.

    Args:
        client: MemoryDB client
        group_name: The name of the parameter group
        parameters: The parameters to set

    Returns:
        The number of UpdateParameterGroup calls made
    """
    calls = 0
    for batch in batched(list(parameters)):
        logger.info(f'Updating {len(batch)} parameters in MemoryDB Parameter Group {group_name}')
        client.update_parameter_group(
            ParameterGroupName=group_name,
            ParameterNameValues=[
                {'ParameterName': parameter.name, 'ParameterValue': parameter.value}
                for parameter in batch
            ],
        )
        calls += 1
    return calls


def apply_parameter_changes(
    client: BaseClient,
    group_name: str,
    changes: ParameterChanges,
    timeout: float = RESET_RETRY_TIMEOUT,
) -> None:
    """Reset removed parameters, then apply added or changed ones.

    Args:
        client: MemoryDB client
        group_name: The name of the parameter group
        changes: The output of diff_parameters
        timeout: Retry budget in seconds for each reset batch
    """
    logger.debug(f'Parameters to reset: {changes.to_reset}')
    logger.debug(f'Parameters to add or update: {[p.name for p in changes.to_apply]}')

    # Removing a parameter from the declaration is equivalent to resetting it to its default.
    if changes.to_reset:
        try:
            reset_parameters(client, group_name, changes.to_reset, timeout=timeout)
        except ClientError as error:
            raise OperationFailedException(
                'resetting parameters to defaults in', group_name, error
            ) from error

    if changes.to_apply:
        try:
            update_parameters(client, group_name, changes.to_apply)
        except ClientError as error:
            raise OperationFailedException('modifying parameters in', group_name, error) from error


def default_parameter_group_name(family: str) -> str:
    """Name of the default parameter group holding the baseline values for a family.

    MemoryDB has no API for family defaults; this mapping is a best guess
    (``memorydb_redis6`` becomes ``default.memorydb-redis6``).
    """
    return DEFAULT_PARAMETER_GROUP_PREFIX + family.replace('_', '-')


def describe_parameters(client: BaseClient, group_name: str) -> List[Dict[str, Any]]:
    """Return every parameter of a group, following NextToken continuation."""
    params: Dict[str, Any] = {'ParameterGroupName': group_name}
    parameters: List[Dict[str, Any]] = []

    response = client.describe_parameters(**params)
    parameters.extend(response.get('Parameters', []))

    next_token = response.get('NextToken')
    while next_token:
        params['NextToken'] = next_token
        response = client.describe_parameters(**params)
        parameters.extend(response.get('Parameters', []))
        next_token = response.get('NextToken')

    return parameters


def list_effective_parameters(
    client: BaseClient,
    family: str,
    group_name: str,
    declared_names: Optional[AbstractSet[str]] = None,
) -> List[Parameter]:
    """List the parameters of a group worth showing to the user.

    A parameter is kept when its value differs from the family default, or when
    its name was declared (so an explicitly declared default stays visible).
    Parameters without a value are dropped and names are lowercased.

    Args:
        client: MemoryDB client
        family: The parameter group family
        group_name: The name of the parameter group
        declared_names: Names of the parameters the user declared

    Returns:
        The effective parameters, in the order MemoryDB returned them
    """
    declared_names = declared_names or set()
    defaults_name = default_parameter_group_name(family)

    try:
        defaults = describe_parameters(client, defaults_name)
    except ClientError as error:
        raise OperationFailedException(
            f'listing defaults for family {family} from', defaults_name, error
        ) from error

    default_value_by_name = {item.get('Name'): item.get('Value') or '' for item in defaults}

    result = []
    for item in describe_parameters(client, group_name):
        name = item.get('Name')
        value = item.get('Value')
        if name is None or value is None:
            continue

        if value != default_value_by_name.get(name, '') or name in declared_names:
            result.append(Parameter(name=name.lower(), value=value))

    return result
