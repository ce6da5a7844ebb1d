import logging
from collections.abc import Callable
from sys import modules
from typing import Any, get_type_hints

from pydantic import create_model
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, SettingsConfigDict


def _is_setting_name(name: str) -> bool:
    return name[:1] != '_' and name.isupper()


def pydantic_settings_integration(
    caller_name: str,
    caller_globals: dict[str, Any],
    /,
    config: SettingsConfigDict | None = None,
    name_filter: Callable[[str], bool] = _is_setting_name,
) -> None:
    """
    Load the upper-case globals of the calling module from the environment.

    A BaseSettings model is built on the fly from the module globals (their
    annotations, or the type of their default value) and its validated values
    are written back into the module namespace.
    """
    settings = {k: v for k, v in caller_globals.items() if name_filter(k)}
    if not settings:
        logging.warning('No settings found in %s matching the filter', caller_name)
        return

    type_hints = get_type_hints(modules[caller_name], caller_globals)
    fields: dict[str, tuple[type, Any]] = {
        name: (
            type_hints.get(name, Any if isinstance(value, FieldInfo) else type(value)),
            value,
        )
        for name, value in settings.items()
    }

    if config is None:
        config = SettingsConfigDict(env_file='.env', extra='ignore')

    base = type(f'{caller_name}_SettingsBase', (BaseSettings,), {'model_config': config})
    model_instance = create_model(
        f'{caller_name}_Settings',
        __base__=base,
        **fields,  # type: ignore
    )()

    for name in settings:
        caller_globals[name] = getattr(model_instance, name)
