# This file is part of ec2-instance-check. See LICENSE file for license information.
"""Validate and normalize the options used to reach the metadata service.

Every option ends up interpolated into a command line, so each one is held
to an allow-list of characters before it is accepted. A bad option never
raises: validation returns a Skip carrying the reason, and the first
failure wins.
"""

import logging
import re
from collections.abc import Mapping
from typing import NamedTuple, Optional, Union

from ec2instance import util

LOG = logging.getLogger(__name__)

CONFIG_KEY = "ec2_instance"

BUILTIN_RESOURCE_CONFIG = {
    "version": "latest",
    "timeout": 2,
    "curl_path": "curl",
    "wget_path": "wget",
}

VERSION_RE = re.compile(r"latest|[\d.-]+", re.ASCII)
TIMEOUT_RE = re.compile(r"\d+", re.ASCII)
EXECUTABLE_RE = re.compile(r"[\w\\/. :-]+", re.ASCII)


class ResourceConfig(NamedTuple):
    version: str
    timeout: int
    curl_path: Optional[str]
    wget_path: Optional[str]


class Skip(NamedTuple):
    """The resource cannot run here; reason is shown to the user."""

    reason: str


def _skip(reason: str) -> Skip:
    LOG.debug("Rejecting resource config: %s", reason)
    return Skip(reason)


def validate_config(opts=None) -> Union[ResourceConfig, Skip]:
    """Turn user options into a ResourceConfig, or a Skip on bad input.

    :param opts: mapping with any of version, timeout, curl_path and
        wget_path. Missing keys take the builtin defaults and unknown
        keys are ignored. None means all defaults.
    """
    if opts is None:
        opts = {}
    if not isinstance(opts, Mapping):
        return _skip(
            "Unsupported parameter %r. Must be a mapping, for example: "
            "ec2_instance({'curl_path': '/usr/bin/curl'})" % (opts,)
        )

    version = opts.get("version")
    if version is None:
        version = BUILTIN_RESOURCE_CONFIG["version"]
    elif not VERSION_RE.fullmatch(str(version)):
        return _skip("Invalid character in version")

    timeout = opts.get("timeout")
    if timeout is None:
        timeout = BUILTIN_RESOURCE_CONFIG["timeout"]
    elif isinstance(timeout, bool) or not TIMEOUT_RE.fullmatch(str(timeout)):
        return _skip("timeout is not numeric")

    paths = {}
    for key in ("curl_path", "wget_path"):
        value = opts.get(key)
        if value is None:
            value = BUILTIN_RESOURCE_CONFIG[key]
        elif not EXECUTABLE_RE.fullmatch(str(value)):
            return _skip("Invalid character in %s" % key)
        paths[key] = str(value)

    config = ResourceConfig(
        version=str(version), timeout=int(timeout), **paths
    )
    LOG.debug("Using resource config: %s", config)
    return config


def load_config(fname) -> dict:
    """Return the ec2_instance section of a YAML config file.

    The file looks like::

        ec2_instance:
          version: "2016-06-30"
          timeout: 3
          curl_path: /usr/bin/curl
    """
    cfg = util.get_cfg_by_path(util.read_conf(fname), [CONFIG_KEY], {})
    if not isinstance(cfg, dict):
        raise ValueError(
            "'%s' in %s must be a mapping, got %s"
            % (CONFIG_KEY, fname, type(cfg).__name__)
        )
    return cfg


def merge_options(*sources) -> dict:
    """Merge option mappings, earlier sources win. None values are unset."""
    return util.mergemanydict(
        [
            {k: v for k, v in source.items() if v is not None}
            for source in sources
            if source
        ]
    )
