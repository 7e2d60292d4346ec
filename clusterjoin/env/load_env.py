import os
from typing import Callable, Dict, Mapping, Union

from dotenv import dotenv_values

from .env import Env

PrimaryType = Union[str, int, bool, float, bytes]


def load_env(default: type[Env], env_file: str | None = None) -> Env:
    """
    Build an Env from a .env file and the process environment.

    Only variables named in default.types_map() are read. Process
    variables take precedence over the file; empty values are ignored.

    Raises:
        ValueError: If a value cannot be converted to its declared type
    """
    envars = default.types_map()

    if env_file is None:
        env_file = ".env"

    values: Dict[str, PrimaryType] = {}

    if os.path.exists(env_file):
        values.update(
            _convert(dotenv_values(dotenv_path=env_file), envars)
        )

    values.update(_convert(os.environ, envars))

    return default(**values)


def _convert(
    source: Mapping[str, str | None],
    envars: Dict[str, Callable[[str], PrimaryType]],
) -> Dict[str, PrimaryType]:
    converted: Dict[str, PrimaryType] = {}

    for envar_name, envar_type in envars.items():
        envar_value = source.get(envar_name)
        if not envar_value:
            continue

        try:
            converted[envar_name] = envar_type(envar_value)

        except ValueError as err:
            raise ValueError(
                f"Invalid value '{envar_value}' for {envar_name}: {err}"
            ) from err

    return converted
