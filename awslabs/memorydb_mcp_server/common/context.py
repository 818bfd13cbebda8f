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

"""Context management for the MemoryDB MCP Server."""

import json
import os
from loguru import logger
from typing import Dict, Optional


class MemoryDBContext:
    """Server-wide settings resolved once at startup."""

    _readonly = True
    _endpoint_url: Optional[str] = None
    _default_tags: Dict[str, str] = {}

    @classmethod
    def initialize(
        cls,
        readonly: bool = True,
        endpoint_url: Optional[str] = None,
        default_tags: Optional[Dict[str, str]] = None,
    ):
        """Initialize the context.

        Args:
            readonly (bool): Whether to run in readonly mode. Defaults to True.
            endpoint_url (Optional[str]): Custom endpoint URL for MemoryDB API calls. Defaults to None.
            default_tags (Optional[Dict[str, str]]): Tags applied to every managed parameter group.
                Defaults to the JSON object in the MEMORYDB_DEFAULT_TAGS environment variable.
        """
        cls._readonly = readonly
        cls._endpoint_url = endpoint_url
        cls._default_tags = (
            dict(default_tags) if default_tags is not None else load_default_tags_from_env()
        )

    @classmethod
    def readonly_mode(cls) -> bool:
        """Check if the server is running in readonly mode.

        Returns:
            True if readonly mode is enabled, False otherwise
        """
        return cls._readonly

    @classmethod
    def endpoint_url(cls) -> Optional[str]:
        """Get the custom endpoint URL for MemoryDB API calls.

        Returns:
            The custom endpoint URL, or None if using default AWS endpoints
        """
        return cls._endpoint_url

    @classmethod
    def default_tags(cls) -> Dict[str, str]:
        """Get the tags merged into every managed parameter group."""
        return dict(cls._default_tags)


def load_default_tags_from_env() -> Dict[str, str]:
    """Parse MEMORYDB_DEFAULT_TAGS as a JSON object of tag keys to values."""
    raw = os.environ.get('MEMORYDB_DEFAULT_TAGS', '')
    if not raw:
        return {}

    try:
        tags = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning('Ignoring MEMORYDB_DEFAULT_TAGS: value is not valid JSON')
        return {}

    if not isinstance(tags, dict):
        logger.warning('Ignoring MEMORYDB_DEFAULT_TAGS: value is not a JSON object')
        return {}

    return {str(key): str(value) for key, value in tags.items()}
