# This file is part of ec2-instance-check. See LICENSE file for license information.
"""pytest integration.

Registered through the pytest11 entry point. Tests ask for the
``ec2_instance`` fixture and call it with any per-test options::

    def test_no_secrets_in_user_data(ec2_instance):
        instance = ec2_instance()
        assert instance.exists()
        user_data = instance["user-data"]
        assert not re.search(r"password|secret.?access", user_data, re.I)

    def test_private_address(ec2_instance):
        instance = ec2_instance(version="2016-06-30", timeout=3)
        assert instance.its("meta-data/local-ipv4").startswith("172.16.")

A resource that cannot run on this host skips the test with its reason.
"""

import logging

import pytest

from ec2instance.adapter import InstanceProperties
from ec2instance.config import load_config, merge_options
from ec2instance.resource import MetadataResource

LOG = logging.getLogger(__name__)

OPTION_DESTS = {
    "version": "ec2_version",
    "timeout": "ec2_timeout",
    "curl_path": "ec2_curl_path",
    "wget_path": "ec2_wget_path",
}


def pytest_addoption(parser):
    group = parser.getgroup("ec2-instance", "EC2 instance metadata")
    group.addoption(
        "--ec2-config",
        dest="ec2_config",
        default=None,
        help="YAML file with an ec2_instance section of resource options",
    )
    group.addoption(
        "--ec2-version",
        dest="ec2_version",
        default=None,
        help="Metadata API version, 'latest' or e.g. 2016-06-30",
    )
    group.addoption(
        "--ec2-timeout",
        dest="ec2_timeout",
        default=None,
        help="Connect timeout in seconds for each metadata request",
    )
    group.addoption(
        "--ec2-curl-path",
        dest="ec2_curl_path",
        default=None,
        help="curl executable to use",
    )
    group.addoption(
        "--ec2-wget-path",
        dest="ec2_wget_path",
        default=None,
        help="wget executable to use",
    )


def session_options(config) -> dict:
    """Resource options from the command line, then the config file."""
    cli = {
        key: config.getoption(dest) for key, dest in OPTION_DESTS.items()
    }
    cfg_file = config.getoption("ec2_config")
    file_opts = load_config(cfg_file) if cfg_file else {}
    return merge_options(cli, file_opts)


def make_instance(opts, defaults=None) -> InstanceProperties:
    """Build the resource or skip the calling test."""
    resource = MetadataResource(merge_options(opts, defaults))
    if resource.resource_skipped:
        pytest.skip(resource.skip_reason)
    return InstanceProperties(resource)


@pytest.fixture(scope="session")
def ec2_instance_options(pytestconfig) -> dict:
    return session_options(pytestconfig)


@pytest.fixture
def ec2_instance(ec2_instance_options):
    def factory(**opts) -> InstanceProperties:
        return make_instance(opts, ec2_instance_options)

    return factory
