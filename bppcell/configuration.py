from abc import ABC, abstractmethod
from copy import deepcopy
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Any, Dict, Generator, Mapping

import typepigeon
import yaml

from bppcell.constants import DEFAULT_STYLE
from bppcell.filtering import DEFAULT_FILTER_POLICY, FilterPolicy


class Configuration(ABC, Mapping):
    fields: Dict[str, type]
    defaults: Dict[str, Any] = None

    def __init__(self, **configuration):
        self.__configuration = {field: None for field in self.fields}
        if len(configuration) > 0:
            self.update(configuration)

        if self.defaults is not None:
            update_none(self.__configuration, deepcopy(self.defaults))

        missing_fields = [field for field in self.fields if field not in self.__configuration]
        if len(missing_fields) > 0:
            raise ValueError(
                f'missing {len(missing_fields)} fields required by "{self.__class__.__name__}" - {list(missing_fields)}'
            )

    @classmethod
    def from_file(cls, filename: PathLike) -> 'Configuration':
        raise NotImplementedError()

    def __contains__(self, key: str) -> bool:
        return key in self.__configuration

    def __getitem__(self, key: str) -> Any:
        return self.__configuration[key]

    def __setitem__(self, key: str, value: Any):
        if key in self.fields:
            value = convert_field_value(value, self.fields[key])
        self.__configuration[key] = value

    def update(self, other: Mapping):
        for key, value in other.items():
            if key in self and isinstance(self[key], Mapping) and isinstance(value, Mapping):
                value = {**self[key], **value}
            self[key] = value

    def __eq__(self, other: 'Configuration') -> bool:
        return other.__configuration == self.__configuration

    def __repr__(self):
        configuration = ', '.join(
            [f'{key}={repr(value)}' for key, value in self.__configuration.items()]
        )
        return f'{self.__class__.__name__}({configuration})'

    def __len__(self) -> int:
        return len(self.__configuration)

    def __iter__(self) -> Generator:
        yield from self.__configuration

    @abstractmethod
    def to_file(self, filename: PathLike):
        raise NotImplementedError()


class ConfigurationYAML(Configuration):
    @classmethod
    def from_file(cls, filename: PathLike) -> 'Configuration':
        with open(filename) as input_file:
            configuration = yaml.safe_load(input_file)
        if configuration is None:
            configuration = {}
        elif not isinstance(configuration, Mapping):
            raise ValueError(f'expected a mapping in "{filename}", not {type(configuration)}')
        return cls(**configuration)

    def to_file(self, filename: PathLike):
        content = typepigeon.convert_to_json(self._Configuration__configuration)
        with open(filename, 'w') as output_file:
            yaml.safe_dump(content, output_file, sort_keys=False)


class ConversionConfiguration(ConfigurationYAML):
    fields = {
        'flight': {'name': str},
        'input': {'filename': Path, 'header_lines': int},
        'output': {'filename': Path, 'overwrite': bool},
        'filter': {'policy': FilterPolicy},
        'style': {'id': str, 'line_color': str, 'line_width': float, 'polygon_color': str},
        'log': {'filename': Path},
    }

    defaults = {
        'flight': {'name': None},
        'input': {'filename': None, 'header_lines': 0},
        'output': {'filename': None, 'overwrite': False},
        'filter': {'policy': DEFAULT_FILTER_POLICY},
        'style': dict(DEFAULT_STYLE),
        'log': {'filename': None},
    }

    def __setitem__(self, key: str, value: Any):
        super().__setitem__(key, value)

        if self[key] is None:
            return

        if key == 'input':
            header_lines = self['input'].get('header_lines')
            if header_lines is not None and header_lines < 0:
                raise ValueError(
                    f'number of header lines must be non-negative, not {header_lines}'
                )

        if key in ('input', 'output', 'log'):
            filename = self[key].get('filename')
            if filename is not None:
                self[key]['filename'] = filename.expanduser()


def convert_field_value(value: Any, field_type: Any) -> Any:
    """
    convert a value read from a configuration file to the type of its field

    :param value: value to convert
    :param field_type: type, or mapping of keys to types
    :return: converted value
    """

    if value is None or field_type is Any:
        return value
    if isinstance(field_type, Mapping):
        if not isinstance(value, Mapping):
            raise ValueError(f'expected a mapping, not {repr(value)}')
        return convert_key_pairs(value, field_type)
    if isinstance(value, field_type):
        return value

    if issubclass(field_type, Enum):
        return field_type(value)
    if field_type is bool and isinstance(value, str):
        # read boolean strings (`yes`, `off`, ...) the way the configuration file would
        converted_value = yaml.safe_load(value)
        if not isinstance(converted_value, bool):
            raise ValueError(f'could not interpret "{value}" as a boolean')
        return converted_value

    try:
        return typepigeon.convert_value(value, field_type)
    except (KeyError, TypeError, ValueError) as error:
        raise ValueError(f'could not convert {repr(value)} to {field_type.__name__} - {error}')


def convert_key_pairs(value_mapping: Mapping, type_mapping: Mapping[str, type]) -> Dict:
    value_mapping = dict(**value_mapping)
    for key, value in value_mapping.items():
        if key in type_mapping:
            value_mapping[key] = convert_field_value(value, type_mapping[key])
    return value_mapping


def update_none(values: Dict[str, Any], defaults: Dict[str, Any]):
    for key, default_value in defaults.items():
        if key not in values or values[key] is None:
            values[key] = default_value
        elif isinstance(values[key], Mapping) and isinstance(default_value, Mapping):
            update_none(values[key], default_value)
