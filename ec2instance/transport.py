# This file is part of ec2-instance-check. See LICENSE file for license information.
"""Pick the mechanism used to reach the metadata service.

The choice is made once per resource. Linux hosts need curl or wget,
Windows hosts use PowerShell which ships with the OS.
"""

import enum
import logging
from typing import List, NamedTuple, Optional, Tuple, Union

from ec2instance import subp, util
from ec2instance.config import ResourceConfig, Skip

LOG = logging.getLogger(__name__)

NO_HTTP_CLIENT_REASON = (
    "'curl' or 'wget' are required on the instance for the resource to work."
)
POWERSHELL = "powershell"


class TransportKind(enum.Enum):
    CURL = "curl"
    WGET = "wget"
    POWERSHELL = "powershell"
    NONE = "none"


class Transport(NamedTuple):
    kind: TransportKind
    # None for POWERSHELL and NONE
    executable: Optional[str] = None


NO_TRANSPORT = Transport(TransportKind.NONE)


def select_transport(
    config: ResourceConfig,
) -> Union[Tuple[Transport, ResourceConfig], Skip]:
    """Probe the host for an http client.

    :return: the chosen Transport and the config with the unused client
        path cleared, or a Skip when nothing usable was found.
    """
    if util.is_linux():
        if config.curl_path and subp.which(config.curl_path):
            LOG.debug("Using curl at %s", config.curl_path)
            return (
                Transport(TransportKind.CURL, config.curl_path),
                config._replace(wget_path=None),
            )
        LOG.debug("curl not runnable as %r", config.curl_path)
        if config.wget_path and subp.which(config.wget_path):
            LOG.debug("Using wget at %s", config.wget_path)
            return (
                Transport(TransportKind.WGET, config.wget_path),
                config._replace(curl_path=None),
            )
        LOG.debug("wget not runnable as %r", config.wget_path)
    elif util.is_windows():
        LOG.debug("Windows host, using PowerShell")
        return (
            Transport(TransportKind.POWERSHELL),
            config._replace(curl_path=None, wget_path=None),
        )
    else:
        LOG.debug("Unsupported host system %r", util.system_name())
    return Skip(NO_HTTP_CLIENT_REASON)


def build_command(transport: Transport, url: str, timeout: int) -> List[str]:
    """Return the argv that fetches url with the given transport.

    The url is passed as a single argument, no shell is involved.
    """
    if transport.kind is TransportKind.CURL:
        return [
            transport.executable,
            "--silent",
            "--fail",
            "--connect-timeout",
            str(timeout),
            url,
        ]
    if transport.kind is TransportKind.WGET:
        return [
            transport.executable,
            "--quiet",
            "--connect-timeout",
            str(timeout),
            "--output-document",
            "-",
            url,
        ]
    if transport.kind is TransportKind.POWERSHELL:
        # Invoke-RestMethod would parse the body (user-data may well be a
        # script), RawContent keeps it verbatim but with headers in front.
        return [
            POWERSHELL,
            "-NoProfile",
            "-NonInteractive",
            "-Command",
            "(Invoke-WebRequest '%s' -UseBasicParsing -TimeoutSec %d)"
            ".RawContent" % (url, timeout),
        ]
    raise ValueError("No command for transport %s" % transport.kind.name)
