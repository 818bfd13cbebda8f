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

"""Lifecycle operations for MemoryDB parameter groups.

Every operation takes the MemoryDB client explicitly and blocks until the
remote calls it makes have completed.
"""

from .common.utils import is_error_code
from .constants import ERROR_CODE_PARAMETER_GROUP_NOT_FOUND, RESET_RETRY_TIMEOUT
from .exceptions import (
    OperationFailedException,
    ParameterGroupNotFoundException,
    ReplacementRequiredException,
)
from .models import ParameterGroupConfig, ParameterGroupState
from .naming import generate_name, name_prefix_from_name
from .reconcile import (
    ParameterSet,
    apply_parameter_changes,
    as_parameters,
    diff_parameters,
    list_effective_parameters,
)
from .tags import (
    ignore_aws_tags,
    list_tags,
    merge_default_tags,
    remove_default_tags,
    tags_to_aws,
    update_tags,
)
from botocore.client import BaseClient
from botocore.exceptions import ClientError
from loguru import logger
from typing import Any, Dict, List, Mapping, Optional


IMMUTABLE_FIELDS = ('name', 'name_prefix', 'description', 'family')


def requires_replacement(old: ParameterGroupConfig, new: ParameterGroupConfig) -> List[str]:
    """Return the immutable fields that differ between two configurations."""
    return [field for field in IMMUTABLE_FIELDS if getattr(old, field) != getattr(new, field)]


def find_parameter_group(client: BaseClient, name: str) -> Dict[str, Any]:
    """Look up a parameter group by name.

    Raises:
        ParameterGroupNotFoundException: If no group has that name
        ClientError: For any other remote failure
    """
    try:
        response = client.describe_parameter_groups(ParameterGroupName=name)
    except ClientError as error:
        if is_error_code(error, ERROR_CODE_PARAMETER_GROUP_NOT_FOUND):
            raise ParameterGroupNotFoundException(name) from error
        raise

    for group in response.get('ParameterGroups', []):
        if group.get('Name') == name:
            return group

    raise ParameterGroupNotFoundException(name)


def create_parameter_group(
    client: BaseClient,
    config: ParameterGroupConfig,
    default_tags: Optional[Mapping[str, str]] = None,
    timeout: float = RESET_RETRY_TIMEOUT,
) -> ParameterGroupState:
    """Create a parameter group, apply its declared parameters and read it back.

    Args:
        client: MemoryDB client
        config: The declared configuration
        default_tags: Tags added to every group managed by this server
        timeout: Retry budget in seconds for each reset batch

    Returns:
        The state of the new group
    """
    name = generate_name(config.name, config.name_prefix)
    tags_all = merge_default_tags(default_tags or {}, config.tags)

    params: Dict[str, Any] = {
        'ParameterGroupName': name,
        'Family': config.family,
        'Description': config.description,
    }
    create_tags = ignore_aws_tags(tags_all)
    if create_tags:
        params['Tags'] = tags_to_aws(create_tags)

    logger.info(f'Creating MemoryDB Parameter Group {name}')
    try:
        response = client.create_parameter_group(**params)
    except ClientError as error:
        raise OperationFailedException('creating', name, error) from error
    logger.success(f'Successfully created MemoryDB Parameter Group {name}')
    logger.debug(f'MemoryDB Parameter Group ARN: {response.get("ParameterGroup", {}).get("ARN")}')

    apply_parameter_changes(client, name, diff_parameters(None, config.parameter_map()), timeout)

    return read_parameter_group(
        client, name, config.parameter_map(), default_tags=default_tags, is_new_resource=True
    )


def read_parameter_group(
    client: BaseClient,
    name: str,
    declared_parameters: ParameterSet = None,
    default_tags: Optional[Mapping[str, str]] = None,
    is_new_resource: bool = False,
) -> Optional[ParameterGroupState]:
    """Read the current state of a parameter group.

    Args:
        client: MemoryDB client
        name: The name of the parameter group
        declared_parameters: The parameters the user declared; these are shown even
            when they equal the family default
        default_tags: Tags added to every group managed by this server
        is_new_resource: Whether the group was created in this operation

    Returns:
        The group state, or None when a previously known group has disappeared

    Raises:
        ParameterGroupNotFoundException: If a newly created group cannot be found
        OperationFailedException: For any other remote failure
    """
    try:
        group = find_parameter_group(client, name)
    except ParameterGroupNotFoundException:
        if not is_new_resource:
            logger.warning(f'MemoryDB Parameter Group ({name}) not found, removing from state')
            return None
        raise
    except ClientError as error:
        raise OperationFailedException('reading', name, error) from error

    family = group.get('Family')
    declared_names = {
        parameter.name for parameter in as_parameters(declared_parameters) if parameter.value
    }

    try:
        parameters = list_effective_parameters(client, family, name, declared_names)
    except ClientError as error:
        raise OperationFailedException('listing parameters for', name, error) from error

    arn = group.get('ARN')
    try:
        tags_all = list_tags(client, arn) if arn else {}
    except ClientError as error:
        raise OperationFailedException('listing tags for', name, error) from error

    group_name = group.get('Name', name)
    return ParameterGroupState(
        name=group_name,
        name_prefix=name_prefix_from_name(group_name),
        arn=arn,
        description=group.get('Description'),
        family=family,
        parameters=parameters,
        tags=remove_default_tags(default_tags or {}, tags_all),
        tags_all=tags_all,
    )


def update_parameter_group(
    client: BaseClient,
    name: str,
    old: ParameterGroupConfig,
    new: ParameterGroupConfig,
    default_tags: Optional[Mapping[str, str]] = None,
    arn: Optional[str] = None,
    timeout: float = RESET_RETRY_TIMEOUT,
) -> Optional[ParameterGroupState]:
    """Move a parameter group from its old declared configuration to the new one.

    Parameters declared before but not now are reset to their defaults, then new
    or changed parameters are applied, then tags are updated. A failure part way
    leaves the batches already sent in place.

    Args:
        client: MemoryDB client
        name: The name of the parameter group
        old: The previously declared configuration
        new: The newly declared configuration
        default_tags: Tags added to every group managed by this server
        arn: The ARN of the group, looked up when tags change and it is not given
        timeout: Retry budget in seconds for each reset batch

    Returns:
        The state of the group after the update, or None if it has disappeared

    Raises:
        ReplacementRequiredException: If an immutable field changed
    """
    changed_fields = requires_replacement(old, new)
    if changed_fields:
        raise ReplacementRequiredException(name, changed_fields)

    changes = diff_parameters(old.parameter_map(), new.parameter_map())
    if not changes.is_empty():
        logger.info(f'Updating MemoryDB Parameter Group {name}')
        apply_parameter_changes(client, name, changes, timeout)
        logger.success(f'Successfully updated parameters in MemoryDB Parameter Group {name}')

    old_tags_all = merge_default_tags(default_tags or {}, old.tags)
    new_tags_all = merge_default_tags(default_tags or {}, new.tags)
    if old_tags_all != new_tags_all:
        try:
            if arn is None:
                arn = find_parameter_group(client, name).get('ARN')
            update_tags(client, arn, old_tags_all, new_tags_all)
        except ClientError as error:
            raise OperationFailedException('updating tags for', name, error) from error

    return read_parameter_group(client, name, new.parameter_map(), default_tags=default_tags)


def delete_parameter_group(client: BaseClient, name: str) -> None:
    """Delete a parameter group; a group that is already gone counts as deleted."""
    logger.info(f'Deleting MemoryDB Parameter Group {name}')
    try:
        client.delete_parameter_group(ParameterGroupName=name)
    except ClientError as error:
        if is_error_code(error, ERROR_CODE_PARAMETER_GROUP_NOT_FOUND):
            logger.info(f'MemoryDB Parameter Group {name} already deleted')
            return
        raise OperationFailedException('deleting', name, error) from error
    logger.success(f'Successfully deleted MemoryDB Parameter Group {name}')


def import_parameter_group(
    client: BaseClient, name: str, default_tags: Optional[Mapping[str, str]] = None
) -> ParameterGroupState:
    """Adopt an existing parameter group by name.

    Nothing is declared yet, so only parameters differing from the family
    defaults are returned.

    Raises:
        ParameterGroupNotFoundException: If the group does not exist
    """
    logger.info(f'Importing MemoryDB Parameter Group {name}')
    return read_parameter_group(client, name, default_tags=default_tags, is_new_resource=True)
