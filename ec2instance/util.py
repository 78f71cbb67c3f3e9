# This file is part of ec2-instance-check. See LICENSE file for license information.

import copy
import logging
import platform

import yaml

LOG = logging.getLogger(__name__)


def system_name() -> str:
    return platform.system().lower()


def is_linux() -> bool:
    return system_name() == "linux"


def is_windows() -> bool:
    return system_name() == "windows" or system_name().startswith("cygwin")


def mergemanydict(sources, reverse=False) -> dict:
    """Merge mappings where the first source to set a key wins.

    Nested mappings are merged the same way.
    """
    if reverse:
        sources = reversed(sources)
    merged_cfg: dict = {}
    for cfg in sources:
        if cfg:
            merged_cfg = _merge_dict(merged_cfg, cfg)
    return merged_cfg


def _merge_dict(base: dict, extra: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in extra.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
        elif isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _merge_dict(merged[key], value)
    return merged


def get_cfg_by_path(yobj, keyp, default=None):
    """Return the value of the item at path C{keyp} in C{yobj}.

    example:
      get_cfg_by_path({'a': {'b': {'num': 4}}}, 'a/b/num') == 4
      get_cfg_by_path({'a': {'b': {'num': 4}}}, 'c/d') == None

    @param yobj: A dictionary.
    @param keyp: A path inside yobj.  it can be a '/' delimited string,
                 or an iterable.
    @param default: The default to return if the path does not exist.
    @return: The value of the item at keyp, or default if it
             is not found."""

    if isinstance(keyp, str):
        keyp = keyp.split("/")
    cur = yobj
    for tok in keyp:
        if not isinstance(cur, dict) or tok not in cur:
            return default
        cur = cur[tok]
    return cur


def read_conf(fname) -> dict:
    """Load a YAML configuration file, an empty file yields {}."""
    LOG.debug("Reading config from %s", fname)
    with open(fname, "r") as f:
        loaded = yaml.safe_load(f)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(
            "Config file %s is not a mapping, got %s"
            % (fname, type(loaded).__name__)
        )
    return loaded
