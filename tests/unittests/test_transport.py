# This file is part of ec2-instance-check. See LICENSE file for license information.

from unittest import mock

import pytest

from ec2instance.config import Skip, validate_config
from ec2instance.transport import (
    NO_HTTP_CLIENT_REASON,
    NO_TRANSPORT,
    Transport,
    TransportKind,
    build_command,
    select_transport,
)

URL = "http://169.254.169.254/latest/meta-data/"


class TestSelectTransport:
    def test_prefers_curl(self, host):
        m_which = host(available=("curl", "wget"))
        transport, config = select_transport(validate_config({}))
        assert Transport(TransportKind.CURL, "curl") == transport
        assert "curl" == config.curl_path
        assert config.wget_path is None
        m_which.assert_called_once_with("curl")

    def test_falls_back_to_wget(self, host):
        host(available=("wget",))
        transport, config = select_transport(validate_config({}))
        assert Transport(TransportKind.WGET, "wget") == transport
        assert config.curl_path is None
        assert "wget" == config.wget_path

    def test_custom_paths_are_probed(self, host):
        m_which = host(available=("/opt/bin/wget",))
        transport, _ = select_transport(
            validate_config(
                {"curl_path": "/opt/bin/curl", "wget_path": "/opt/bin/wget"}
            )
        )
        assert Transport(TransportKind.WGET, "/opt/bin/wget") == transport
        assert [
            mock.call("/opt/bin/curl"),
            mock.call("/opt/bin/wget"),
        ] == m_which.call_args_list

    def test_no_client_on_linux(self, host):
        host(available=())
        assert Skip(NO_HTTP_CLIENT_REASON) == select_transport(
            validate_config({})
        )

    def test_windows_uses_powershell_without_probing(self, host):
        m_which = host(system="windows", available=())
        transport, config = select_transport(validate_config({}))
        assert Transport(TransportKind.POWERSHELL) == transport
        assert transport.executable is None
        assert config.curl_path is None and config.wget_path is None
        m_which.assert_not_called()

    @pytest.mark.parametrize("system", ["darwin", "freebsd", ""])
    def test_other_systems_are_skipped(self, system, host):
        m_which = host(system=system)
        assert Skip(NO_HTTP_CLIENT_REASON) == select_transport(
            validate_config({})
        )
        m_which.assert_not_called()


class TestBuildCommand:
    def test_curl(self):
        assert [
            "/usr/bin/curl",
            "--silent",
            "--fail",
            "--connect-timeout",
            "2",
            URL,
        ] == build_command(
            Transport(TransportKind.CURL, "/usr/bin/curl"), URL, 2
        )

    def test_wget(self):
        assert [
            "wget",
            "--quiet",
            "--connect-timeout",
            "3",
            "--output-document",
            "-",
            URL,
        ] == build_command(Transport(TransportKind.WGET, "wget"), URL, 3)

    def test_powershell(self):
        cmd = build_command(Transport(TransportKind.POWERSHELL), URL, 5)
        assert "powershell" == cmd[0]
        assert "-Command" in cmd
        assert (
            "(Invoke-WebRequest '%s' -UseBasicParsing -TimeoutSec 5)"
            ".RawContent" % URL
        ) == cmd[-1]

    def test_none_has_no_command(self):
        with pytest.raises(ValueError):
            build_command(NO_TRANSPORT, URL, 2)
