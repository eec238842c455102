from .exceptions import ParamError, ConfigError
from .fn import identity, Composition, compose_left, compose_right, flatten, compose, pipe
from .composable import Composable, composable
from .report import report, catch_time
from .config import dotdict, load_config, resolve_callable, pipeline_from_config, load_pipeline
