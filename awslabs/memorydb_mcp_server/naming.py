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

"""Name generation for parameter groups created without an explicit name."""

import re
import time
import uuid
from .constants import DEFAULT_NAME_PREFIX, UNIQUE_ID_SUFFIX_LENGTH
from typing import Optional


# 18 digits of UTC time followed by 8 hex digits, so generated names sort by creation time
UNIQUE_ID_SUFFIX_PATTERN = re.compile(r'\d{18}[0-9a-f]{8}$')


def unique_id_suffix() -> str:
    """Return a 26 character suffix that is unique and increases over time."""
    seconds, nanoseconds = divmod(time.time_ns(), 10**9)
    # seconds, then four digits of the fraction of a second
    timestamp = time.strftime('%Y%m%d%H%M%S', time.gmtime(seconds))
    return f'{timestamp}{nanoseconds // 10**5:04d}{uuid.uuid4().hex[:8]}'


def generate_name(name: Optional[str] = None, name_prefix: Optional[str] = None) -> str:
    """Pick the name for a new parameter group.

    Args:
        name: The explicitly requested name, which always wins
        name_prefix: Prefix for a generated name

    Returns:
        The name to create the group with
    """
    if name:
        return name

    prefix = name_prefix if name_prefix else DEFAULT_NAME_PREFIX
    return f'{prefix}{unique_id_suffix()}'


def name_prefix_from_name(name: Optional[str]) -> Optional[str]:
    """Return the prefix a generated name was built from, or None for explicit names."""
    if not name or len(name) < UNIQUE_ID_SUFFIX_LENGTH:
        return None

    if not UNIQUE_ID_SUFFIX_PATTERN.search(name):
        return None

    return name[:-UNIQUE_ID_SUFFIX_LENGTH] or None
