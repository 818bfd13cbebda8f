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

"""awslabs MemoryDB MCP Server implementation."""

import argparse
import awslabs.memorydb_mcp_server.tools  # noqa: F401 - imported for side effects to register tools
import os
import sys
from awslabs.memorydb_mcp_server.common.connection import MemoryDBConnectionManager
from awslabs.memorydb_mcp_server.common.context import MemoryDBContext
from awslabs.memorydb_mcp_server.common.server import mcp
from awslabs.memorydb_mcp_server.constants import MCP_SERVER_VERSION
from loguru import logger


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='An AWS Labs MCP server for managing Amazon MemoryDB parameter groups'
    )
    parser.add_argument('--port', type=int, default=8888, help='Port to run the server on')
    parser.add_argument(
        '--region',
        type=str,
        default=os.environ.get('AWS_REGION', 'us-east-1'),
        help='AWS region for MemoryDB operations',
    )
    parser.add_argument(
        '--readonly',
        default=True,
        action=argparse.BooleanOptionalAction,
        help='Prevents the MCP server from performing mutating operations',
    )
    parser.add_argument('--profile', type=str, help='AWS profile to use for credentials')
    parser.add_argument(
        '--endpoint-url', type=str, default=None, help='Custom endpoint URL for MemoryDB API calls'
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Run the MCP server with CLI argument support."""
    args = parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level=os.environ.get('FASTMCP_LOG_LEVEL', 'INFO'))

    if args.profile:
        os.environ['AWS_PROFILE'] = args.profile

    MemoryDBContext.initialize(readonly=args.readonly, endpoint_url=args.endpoint_url)
    MemoryDBConnectionManager.initialize(region=args.region)

    mcp.settings.port = args.port

    logger.info(f'Starting MemoryDB MCP Server v{MCP_SERVER_VERSION}')
    logger.info(f'Region: {MemoryDBConnectionManager.get_region()}')
    logger.info(f'Read-only mode: {MemoryDBContext.readonly_mode()}')
    if args.profile:
        logger.info(f'AWS Profile: {args.profile}')
    if args.endpoint_url:
        logger.info(f'Endpoint URL: {args.endpoint_url}')

    mcp.run()


if __name__ == '__main__':
    main()
