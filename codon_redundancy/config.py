# config.py

import copy
import json
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    'genetic_code': 'standard',
    'table_cache_size': 32,
    'float_format': '%.6f',
}


def load_config() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_CONFIG)


def check_option(key: str, value: Any) -> None:
    """Raises ValueError if `value` is not acceptable for option `key`."""
    if key == 'table_cache_size':
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f'table_cache_size must be a positive integer, got {value!r}')
    elif key == 'float_format':
        if not isinstance(value, str):
            raise ValueError(f'float_format must be a string, got {value!r}')
    elif key == 'genetic_code':
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ValueError(f'genetic_code must be an NCBI id or a name, got {value!r}')


def load_preset(text: str) -> Dict[str, Any]:
    """Parses a JSON preset. Only keys present in DEFAULT_CONFIG are allowed."""
    preset = json.loads(text)
    if not isinstance(preset, dict):
        raise ValueError('Preset must be a JSON object')

    unknown = sorted(set(preset) - set(DEFAULT_CONFIG))
    if unknown:
        raise ValueError(f'Unknown preset option(s): {", ".join(unknown)}')

    for key, value in preset.items():
        check_option(key, value)

    return preset
