# This file is part of ec2-instance-check. See LICENSE file for license information.
"""Resource for testing EC2 instance meta-data and user-data.

Notes:
 * Configuration and the http client are resolved once, when the resource
   is created. Either can leave the resource skipped; the reason is kept in
   skip_reason and nothing raises.
 * A missing property, a refused connection and a timeout all come back as
   empty (or partial) text. Assertions on the value are what fail.
 * Property paths and options are allow-listed, they end up on a command
   line.
"""

import logging
import re
from typing import Optional

from ec2instance import subp
from ec2instance.config import ResourceConfig, Skip, validate_config
from ec2instance.transport import (
    NO_TRANSPORT,
    Transport,
    TransportKind,
    build_command,
    select_transport,
)

LOG = logging.getLogger(__name__)

METADATA_ROOT = "http://169.254.169.254"
PROPERTY_RE = re.compile(r"[\w/-]+", re.ASCII)
INVALID_PROPERTY = "Invalid character in property"
NO_HTTP_CLIENT = "No http client available on the node"
IDENTITY_LISTING = "meta-data/"
IDENTITY_KEY_RE = re.compile(r"^ami-id$", re.MULTILINE)
RAW_BODY_RE = re.compile(r"\r\n\r\n([\s\S]*)")


class MetadataResource:
    """Query the instance metadata service.

    Example, from a pytest test::

        res = MetadataResource({"version": "2016-06-30", "timeout": 3})
        if res.resource_skipped:
            pytest.skip(res.skip_reason)
        assert res.exists()
        assert not re.search("password", res.get("user-data"), re.I)
    """

    name = "ec2_instance"
    desc = (
        "The ec2_instance resource provides the ability to test meta-data "
        "and user-data for compute instances in AWS."
    )

    def __init__(self, opts=None):
        self.config: Optional[ResourceConfig] = None
        self.transport: Transport = NO_TRANSPORT
        self.skip_reason: Optional[str] = None

        result = validate_config(opts)
        if isinstance(result, Skip):
            self._skip(result)
            return
        selected = select_transport(result)
        if isinstance(selected, Skip):
            self.config = result
            self._skip(selected)
            return
        self.transport, self.config = selected

    def __repr__(self):
        if self.resource_skipped:
            return "%s(skipped: %s)" % (self.name, self.skip_reason)
        return "%s(version=%s, transport=%s)" % (
            self.name,
            self.config.version,
            self.transport.kind.value,
        )

    def _skip(self, skip: Skip):
        LOG.warning("Skipping %s: %s", self.name, skip.reason)
        self.skip_reason = skip.reason

    @property
    def resource_skipped(self) -> bool:
        return self.skip_reason is not None

    def exists(self) -> bool:
        """True when the meta-data listing has an ami-id entry."""
        return bool(IDENTITY_KEY_RE.search(self.get(IDENTITY_LISTING)))

    def url_for(self, property_path: str) -> str:
        return "%s/%s/%s" % (METADATA_ROOT, self.config.version, property_path)

    def get(self, property_path: str) -> str:
        """Fetch a metadata property, e.g. 'meta-data/public-ipv4'.

        :return: the raw text served for the path. Diagnostics for a bad
            path or a missing http client are returned as the value
            itself so they fail content assertions.
        """
        if not isinstance(property_path, str) or not PROPERTY_RE.fullmatch(
            property_path
        ):
            LOG.debug("Rejecting property path %r", property_path)
            return INVALID_PROPERTY
        if self.transport.kind is TransportKind.NONE:
            return NO_HTTP_CLIENT

        url = self.url_for(property_path)
        cmd = build_command(self.transport, url, self.config.timeout)
        try:
            out = subp.subp(cmd).stdout
        except subp.ProcessExecutionError as e:
            # curl --fail exits 22 on a 404, which is how absent
            # properties look. Keep whatever made it to stdout.
            LOG.debug(
                "Fetching %s with %s exited %s: %s",
                url,
                self.transport.kind.value,
                e.exit_code,
                e.stderr.strip() or e.reason,
            )
            out = e.stdout
        if self.transport.kind is TransportKind.POWERSHELL:
            return _strip_headers(out)
        return out


def _strip_headers(raw_content: str) -> str:
    """Drop the status line and headers from an Invoke-WebRequest RawContent.

    Without a blank line separating headers from the body there is no body.
    """
    match = RAW_BODY_RE.search(raw_content.strip())
    if not match:
        return ""
    return match.group(1)
