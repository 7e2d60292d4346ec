from .errors import ConfigError as ConfigError
from .run_config import RunConfig as RunConfig
