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

"""Models describing MemoryDB parameter group configuration and state."""

import re
from .constants import DEFAULT_DESCRIPTION, MAX_NAME_LENGTH, UNIQUE_ID_SUFFIX_LENGTH
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, List, Optional


# MemoryDB normalises names to lowercase.
NAME_PATTERN = re.compile(r'^[a-z0-9-]*[a-z0-9]$')
NAME_PREFIX_PATTERN = re.compile(r'^[a-z0-9-]+$')


def _check_hyphens(value: str) -> None:
    if '--' in value:
        raise ValueError('The name may not contain two consecutive hyphens.')


def validate_name(value: str) -> str:
    """Validate a parameter group name.

    Names are 1-255 characters of lowercase alphanumerics and hyphens,
    may not end with a hyphen and may not contain two consecutive hyphens.
    """
    if not 1 <= len(value) <= MAX_NAME_LENGTH:
        raise ValueError(f'The name must be between 1 and {MAX_NAME_LENGTH} characters.')
    _check_hyphens(value)
    if not NAME_PATTERN.match(value):
        raise ValueError(
            'Only lowercase alphanumeric characters and hyphens allowed. '
            'The name may not end with a hyphen.'
        )
    return value


def validate_name_prefix(value: str) -> str:
    """Validate a name prefix; room is left for the generated unique suffix."""
    max_length = MAX_NAME_LENGTH - UNIQUE_ID_SUFFIX_LENGTH
    if not 1 <= len(value) <= max_length:
        raise ValueError(f'The name prefix must be between 1 and {max_length} characters.')
    _check_hyphens(value)
    if not NAME_PREFIX_PATTERN.match(value):
        raise ValueError('Only lowercase alphanumeric characters and hyphens allowed.')
    return value


class Parameter(BaseModel):
    """A single parameter name/value pair."""

    name: str = Field(min_length=1, description='The name of the parameter')
    value: str = Field(description='The value of the parameter')


class ParameterChanges(BaseModel):
    """Parameters to reset to their defaults, and parameters to add or update."""

    to_reset: List[str] = Field(
        default_factory=list, description='Names of parameters to reset to the family default'
    )
    to_apply: List[Parameter] = Field(
        default_factory=list, description='Parameters to add or update'
    )

    def is_empty(self) -> bool:
        """Return True when there is nothing to change."""
        return not self.to_reset and not self.to_apply


class ParameterGroupConfig(BaseModel):
    """User-declared configuration of a parameter group."""

    name: Optional[str] = Field(
        None, description='The name of the parameter group. Conflicts with name_prefix'
    )
    name_prefix: Optional[str] = Field(
        None, description='Creates a unique name beginning with the given prefix'
    )
    description: str = Field(
        DEFAULT_DESCRIPTION, description='The description of the parameter group'
    )
    family: str = Field(min_length=1, description='The engine version family of the group')
    parameters: List[Parameter] = Field(
        default_factory=list, description='Parameters to set in the group'
    )
    tags: Dict[str, str] = Field(default_factory=dict, description='Tags to assign to the group')

    @field_validator('name')
    @classmethod
    def _validate_name(cls, value: Optional[str]) -> Optional[str]:
        return validate_name(value) if value is not None else value

    @field_validator('name_prefix')
    @classmethod
    def _validate_name_prefix(cls, value: Optional[str]) -> Optional[str]:
        return validate_name_prefix(value) if value is not None else value

    @field_validator('parameters')
    @classmethod
    def _unique_parameter_names(cls, value: List[Parameter]) -> List[Parameter]:
        seen = set()
        for parameter in value:
            if parameter.name in seen:
                raise ValueError(f'Duplicate parameter name: {parameter.name}')
            seen.add(parameter.name)
        return value

    @model_validator(mode='after')
    def _name_conflicts_with_prefix(self) -> 'ParameterGroupConfig':
        if self.name is not None and self.name_prefix is not None:
            raise ValueError('"name" conflicts with "name_prefix"')
        return self

    def parameter_map(self) -> Dict[str, str]:
        """Declared parameters keyed by name."""
        return {parameter.name: parameter.value for parameter in self.parameters}


class ParameterGroupState(BaseModel):
    """Observed state of a parameter group."""

    name: str = Field(description='The name of the parameter group')
    name_prefix: Optional[str] = Field(
        None, description='The prefix the name was generated from, if any'
    )
    arn: Optional[str] = Field(None, description='The Amazon Resource Name (ARN) of the group')
    description: Optional[str] = Field(None, description='The description of the group')
    family: str = Field(description='The engine version family of the group')
    parameters: List[Parameter] = Field(
        default_factory=list,
        description='Parameters that differ from the family defaults or were declared',
    )
    tags: Dict[str, str] = Field(
        default_factory=dict, description='Tags on the group, excluding server default tags'
    )
    tags_all: Dict[str, str] = Field(
        default_factory=dict, description='All tags on the group, including server default tags'
    )

    def to_config(self) -> ParameterGroupConfig:
        """Declared configuration equivalent to this state, as produced by an import.

        Values read from MemoryDB are taken as they are: names outside the rules for
        new groups (such as ``default.memorydb-redis7``) are kept, and a generated
        name carries both the name and the prefix it was built from.
        """
        return ParameterGroupConfig.model_construct(
            name=self.name,
            name_prefix=self.name_prefix,
            description=self.description or DEFAULT_DESCRIPTION,
            family=self.family,
            parameters=list(self.parameters),
            tags=dict(self.tags),
        )
