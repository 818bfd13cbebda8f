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

"""Parameter group tools module."""

from .create_parameter_group import create_memorydb_parameter_group
from .delete_parameter_group import delete_memorydb_parameter_group
from .describe_parameter_group import describe_memorydb_parameter_group
from .import_parameter_group import import_memorydb_parameter_group
from .update_parameter_group import update_memorydb_parameter_group

__all__ = [
    'create_memorydb_parameter_group',
    'delete_memorydb_parameter_group',
    'describe_memorydb_parameter_group',
    'import_memorydb_parameter_group',
    'update_memorydb_parameter_group',
]
