import os
from typing import Any, Dict, Optional

import toml

from hyprws import errors

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__),
                                   'default_config.toml')
XDG_CONFIG_HOME = os.environ.get('XDG_CONFIG_HOME',
                                 os.path.expandvars('$HOME/.config'))
CONFIG_PATH = os.path.join(XDG_CONFIG_HOME, 'hyprws', 'config.toml')

Config = Dict[str, Any]

ConfigError = errors.ConfigError


def merge_config(merge_from: Config, merge_into: Config) -> None:
    """Recursively copies keys missing in merge_into from merge_from.

    Keys already present in merge_into are kept as is. Empty lists are not
    copied so that they don't shadow values added later.
    """
    for key, value in merge_from.items():
        if isinstance(value, dict):
            merge_into.setdefault(key, {})
            merge_config(value, merge_into[key])
        elif isinstance(value, list) and not value:
            continue
        elif key not in merge_into:
            merge_into[key] = value


def _load(path: str) -> Config:
    try:
        return toml.load(path)
    except toml.TomlDecodeError as e:
        raise ConfigError(f'Invalid config file {path}: {e}') from e
    except OSError as e:
        raise ConfigError(f'Failed reading config file {path}: {e}') from e


def _validate(config: Config) -> None:
    for key, expected_types in [
        ('log_level', (str,)),
        ('dry_run', (bool,)),
        ('socket_path', (str,)),
        ('ipc_timeout', (int, float)),
    ]:
        value = config[key]
        # bool is a subclass of int, so it has to be rejected explicitly.
        if not isinstance(value, expected_types) or (
                bool not in expected_types and isinstance(value, bool)):
            raise ConfigError(
                f'Invalid value for "{key}": {value!r}')
    if config['ipc_timeout'] < 0:
        raise ConfigError('"ipc_timeout" must not be negative')


def get_config_with_defaults(path: Optional[str] = None,
                             fail_if_missing: bool = False) -> Config:
    if path is None:
        path = CONFIG_PATH
    if fail_if_missing and not os.path.exists(path):
        raise ConfigError(f'No config file found in {path}')
    config = {}
    if os.path.exists(path):
        config = _load(path)
    merge_config(_load(DEFAULT_CONFIG_PATH), config)
    _validate(config)
    return config
