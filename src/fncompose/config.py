"""
Pipelines defined in YAML configuration files, e.g.

pipeline:
    order: pipe         # or 'compose', default is 'pipe'
    report: false       # log time of every stage
    stages:
        - builtins:set
        - builtins:len
        - builtins:str
"""
from typing import *
import importlib
import logging
import os
import yaml

from .exceptions import ConfigError
from .fn import compose, pipe, flatten
from .report import report


class YamlLimitedSafeLoader(type):
    """Meta YAML loader that skips the resolution of the specified YAML tags."""
    def __new__(cls, name, bases, namespace, do_not_resolve: List[str]) -> Type[yaml.SafeLoader]:
        do_not_resolve = set(do_not_resolve)
        implicit_resolvers = {
            key: [(tag, regex) for tag, regex in mappings if tag not in do_not_resolve]
            for key, mappings in yaml.SafeLoader.yaml_implicit_resolvers.items()
        }
        return super().__new__(
            cls,
            name,
            (yaml.SafeLoader, *bases),
            {**namespace, "yaml_implicit_resolvers": implicit_resolvers},
        )


class YamlNoTimestampSafeLoader(
    metaclass=YamlLimitedSafeLoader, do_not_resolve={"tag:yaml.org,2002:timestamp"}
):
    """A safe YAML loader that leaves timestamps as strings."""
    pass


class dotdict(dict):
    """
    dot.notation access to dictionary attributes
    """
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__

    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError:
            return self.__getattribute__(item)

    @classmethod
    def create(cls, cfg: Any):
        """
        - recursively replace all dicts by the dotdict.
        """
        if isinstance(cfg, dict):
            items = ((k, cls.create(v)) for k, v in cfg.items())
            return dotdict(items)
        elif isinstance(cfg, list):
            return [cls.create(i) for i in cfg]
        elif isinstance(cfg, tuple):
            return tuple([cls.create(i) for i in cfg])
        else:
            return cfg


def load_config(path) -> dotdict:
    """
    Load configuration from given file, replace dictionaries by dotdict.
    """
    cfg_dir = os.path.dirname(path)
    with open(path) as f:
        cfg = yaml.load(f, Loader=YamlNoTimestampSafeLoader)
    if not isinstance(cfg, dict):
        raise ConfigError(f"Expected a mapping at top level of: {path}")
    cfg['_config_root_dir'] = os.path.abspath(cfg_dir)
    return dotdict.create(cfg)


def resolve_callable(ref: str) -> Callable:
    """
    Import the object given by the reference:
        'package.module:attr.sub_attr'  or  'package.module.attr'
    """
    if not isinstance(ref, str):
        raise ConfigError(f"Callable reference must be a string, get: {ref!r}")
    if ':' in ref:
        module_name, _, attr_path = ref.partition(':')
    else:
        module_name, _, attr_path = ref.rpartition('.')
    if not module_name or not attr_path:
        raise ConfigError(f"Wrong callable reference: '{ref}', expected 'module:name'.")
    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Can not import module '{module_name}' of reference '{ref}'.") from e
    for attr in attr_path.split('.'):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ConfigError(f"Missing attribute '{attr}' of reference '{ref}'.") from e
    if not callable(obj):
        raise ConfigError(f"Reference '{ref}' is not callable, get: {type(obj)}")
    return obj


def _resolve_stages(stages):
    if isinstance(stages, (list, tuple)):
        return [_resolve_stages(s) for s in stages]
    return resolve_callable(stages)


_orders = {'pipe': pipe, 'compose': compose}


def pipeline_from_config(cfg: Dict[str, Any]) -> Callable:
    """
    Make composed function from the pipeline configuration:
    stages: list of callable references, nested lists allowed
    order: 'pipe' (first stage applied first) or 'compose' (last stage applied first)
    report: if true, every stage logs its duration
    """
    if not isinstance(cfg, dict) or 'stages' not in cfg:
        raise ConfigError(f"Pipeline configuration needs 'stages' list, get: {cfg!r}")
    stages_cfg = cfg['stages']
    if not isinstance(stages_cfg, (list, tuple)):
        raise ConfigError(f"Pipeline 'stages' must be a list of callable references, get: {stages_cfg!r}")
    order = cfg.get('order', 'pipe')
    if not isinstance(order, str) or order not in _orders:
        raise ConfigError(f"Unknown pipeline order: '{order}', allowed: {list(_orders)}")
    composer = _orders[order]
    stages = flatten(_resolve_stages(stages_cfg))
    if cfg.get('report', False):
        stages = [report(s) for s in stages]
    logging.info(f"Pipeline of {len(stages)} stages, order: {order}")
    return composer(stages)


def load_pipeline(path, key: str = 'pipeline') -> Callable:
    cfg = load_config(path)
    try:
        pipeline_cfg = cfg[key]
    except KeyError:
        raise ConfigError(f"Missing key '{key}' in: {path}")
    return pipeline_from_config(pipeline_cfg)
