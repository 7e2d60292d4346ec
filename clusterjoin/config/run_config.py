"""
YAML run configuration for the node startup script.

Example:
    exec: /cockroach/cockroach
    srv:
      - _grpc._tcp.cockroachdb.default.svc.cluster.local
    join-max: 3
    args:
      certs-dir: /cockroach/cockroach-certs
      advertise-host: cockroachdb-0.cockroachdb
      cache: 25%

Every key under args is passed to the binary as --key="value".
"""

import pathlib

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from .errors import ConfigError


ArgValue = StrictStr | bool | int | float


class RunConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    exec: StrictStr = "/cockroach/cockroach"
    args: dict[StrictStr, ArgValue] = Field(default_factory=dict)
    srv: list[StrictStr] = Field(default_factory=list)
    join_max: int = Field(default=0, ge=0, alias="join-max")

    @classmethod
    def read(cls, path: str) -> "RunConfig":
        try:
            raw = pathlib.Path(path).read_text()
            data = yaml.safe_load(raw) or {}

        except (OSError, yaml.YAMLError) as err:
            raise ConfigError(path, str(err)) from err

        if not isinstance(data, dict):
            raise ConfigError(path, "top level must be a mapping")

        try:
            return cls.model_validate(data)

        except ValidationError as err:
            raise ConfigError(path, str(err)) from err

    def exec_cmd(self) -> str:
        flags = [
            f"--{name}={_quote(_to_str(value))}"
            for name, value in self.args.items()
        ]

        return " ".join([self.exec, "start", *flags])

    def set_locality(self, locality: str) -> None:
        """Override the locality read from the config file."""
        self.args["locality"] = locality

    def set_join(self, join: str) -> None:
        """Override the join list read from the config file."""
        self.args["join"] = join


def _to_str(value: ArgValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"

    return str(value)


def _quote(value: str) -> str:
    # Double quoted for /bin/sh; escape what is still special inside quotes
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("`", "\\`")
    )
    return f'"{escaped}"'
