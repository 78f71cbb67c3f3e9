# This file is part of ec2-instance-check. See LICENSE file for license information.

import pytest

from tests.unittests.helpers import fake_which


@pytest.fixture
def host(mocker):
    """Pretend to be a host; returns a setter for os and available tools."""

    def _host(system="linux", available=("curl", "wget")):
        mocker.patch("ec2instance.util.system_name", return_value=system)
        return mocker.patch(
            "ec2instance.subp.which", side_effect=fake_which(*available)
        )

    return _host


@pytest.fixture
def m_subp(mocker):
    return mocker.patch("ec2instance.subp.subp")
