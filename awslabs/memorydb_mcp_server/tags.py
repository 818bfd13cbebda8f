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

"""Tag helpers for MemoryDB resources."""

from .constants import AWS_TAG_PREFIX
from botocore.client import BaseClient
from loguru import logger
from typing import Dict, List, Mapping, Optional


def tags_to_aws(tags: Optional[Mapping[str, str]]) -> List[Dict[str, str]]:
    """Convert a tag mapping to the AWS Key/Value list shape."""
    return [{'Key': key, 'Value': value} for key, value in sorted((tags or {}).items())]


def aws_to_tags(tag_list: Optional[List[Dict[str, str]]]) -> Dict[str, str]:
    """Convert an AWS Key/Value tag list to a mapping."""
    return {tag['Key']: tag.get('Value', '') for tag in tag_list or []}


def ignore_aws_tags(tags: Mapping[str, str]) -> Dict[str, str]:
    """Drop tags reserved by AWS, which cannot be managed."""
    return {key: value for key, value in tags.items() if not key.startswith(AWS_TAG_PREFIX)}


def merge_default_tags(
    default_tags: Mapping[str, str], tags: Optional[Mapping[str, str]]
) -> Dict[str, str]:
    """Combine server default tags with resource tags; resource tags win."""
    return {**default_tags, **(tags or {})}


def remove_default_tags(
    default_tags: Mapping[str, str], tags: Mapping[str, str]
) -> Dict[str, str]:
    """Remove default tags from a tag mapping unless the resource overrides their value."""
    return {
        key: value
        for key, value in tags.items()
        if key not in default_tags or default_tags[key] != value
    }


def list_tags(client: BaseClient, arn: str) -> Dict[str, str]:
    """List the tags on a MemoryDB resource.

    Args:
        client: MemoryDB client
        arn: ARN of the resource

    Returns:
        Tags on the resource, without AWS reserved tags
    """
    response = client.list_tags(ResourceArn=arn)
    return ignore_aws_tags(aws_to_tags(response.get('TagList', [])))


def update_tags(
    client: BaseClient,
    arn: str,
    old_tags: Optional[Mapping[str, str]],
    new_tags: Optional[Mapping[str, str]],
) -> None:
    """Update the tags on a MemoryDB resource from old_tags to new_tags.

    Removed keys are untagged first, then added or changed keys are tagged.

    Args:
        client: MemoryDB client
        arn: ARN of the resource
        old_tags: Tags currently on the resource
        new_tags: Tags the resource should have
    """
    old_tags = ignore_aws_tags(old_tags or {})
    new_tags = ignore_aws_tags(new_tags or {})

    removed = sorted(key for key in old_tags if key not in new_tags)
    updated = {
        key: value
        for key, value in new_tags.items()
        if key not in old_tags or old_tags[key] != value
    }

    if removed:
        logger.debug(f'Removing tags {removed} from {arn}')
        client.untag_resource(ResourceArn=arn, TagKeys=removed)

    if updated:
        logger.debug(f'Updating tags {sorted(updated)} on {arn}')
        client.tag_resource(ResourceArn=arn, Tags=tags_to_aws(updated))
