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

"""Connection management for AWS services used by the MemoryDB MCP Server."""

import boto3
import os
from ..constants import MCP_SERVER_VERSION
from .context import MemoryDBContext
from botocore.config import Config
from typing import Any, Optional


class BaseConnectionManager:
    """Base class for AWS service connection managers."""

    _client: Optional[Any] = None
    _service_name: str = ''
    _env_prefix: str = ''

    @classmethod
    def get_connection(cls) -> Any:
        """Get or create an AWS service client connection with retry capabilities.

        Returns:
            boto3.client: An AWS service client configured with retries
        """
        if cls._client is None:
            # get AWS configuration from environment
            aws_profile = os.environ.get('AWS_PROFILE', '')
            aws_region = os.environ.get('AWS_REGION', 'us-east-1')

            # configuration retry settings
            max_retries = int(os.environ.get(f'{cls._env_prefix}_MAX_RETRIES', '3'))
            retry_mode = os.environ.get(f'{cls._env_prefix}_RETRY_MODE', 'standard')
            connect_timeout = int(os.environ.get(f'{cls._env_prefix}_CONNECT_TIMEOUT', '5'))
            read_timeout = int(os.environ.get(f'{cls._env_prefix}_READ_TIMEOUT', '10'))

            config = Config(
                retries={'max_attempts': max_retries, 'mode': retry_mode},
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
                user_agent_extra=f'MCP/MemoryDBMCPServer/{MCP_SERVER_VERSION}',
            )

            if aws_profile:
                session = boto3.Session(profile_name=aws_profile, region_name=aws_region)
            else:
                session = boto3.Session(
                    aws_access_key_id=os.environ.get('AWS_ACCESS_KEY_ID'),
                    aws_secret_access_key=os.environ.get('AWS_SECRET_ACCESS_KEY'),
                    aws_session_token=os.environ.get('AWS_SESSION_TOKEN'),
                    region_name=aws_region,
                )

            client_kwargs = {'service_name': cls._service_name, 'config': config}
            endpoint_url = MemoryDBContext.endpoint_url()
            if endpoint_url:
                client_kwargs['endpoint_url'] = endpoint_url
            cls._client = session.client(**client_kwargs)

        return cls._client

    @classmethod
    def close_connection(cls) -> None:
        """Close the AWS service client connection."""
        if cls._client is not None:
            cls._client.close()
            cls._client = None


class MemoryDBConnectionManager(BaseConnectionManager):
    """Manages connection to MemoryDB using boto3."""

    _client: Optional[Any] = None
    _service_name = 'memorydb'
    _env_prefix = 'MEMORYDB'
    _region: Optional[str] = None

    @classmethod
    def initialize(cls, region: Optional[str] = None):
        """Initialize the connection manager for a region.

        Args:
            region (str): AWS region for MemoryDB operations
        """
        cls._region = region or os.environ.get('AWS_REGION', 'us-east-1')
        os.environ['AWS_REGION'] = cls._region

        cls._client = None

    @classmethod
    def get_region(cls) -> Optional[str]:
        """Get the AWS region.

        Returns:
            str: AWS region
        """
        return cls._region
