# This file is part of ec2-instance-check. See LICENSE file for license information.

import pytest

from ec2instance.cmd import main
from tests.unittests.helpers import subp_ok


class TestMain:
    def test_get_prints_value(self, host, m_subp, capsys):
        host(available=("curl",))
        m_subp.return_value = subp_ok("10.0.0.5")
        assert 0 == main.main(["get", "meta-data/local-ipv4"])
        assert "10.0.0.5\n" == capsys.readouterr().out

    def test_get_many_prints_headers(self, host, m_subp, capsys):
        host(available=("curl",))
        m_subp.return_value = subp_ok("x\n")
        assert 0 == main.main(["get", "hostname", "user-data"])
        assert "hostname:\nx\nuser-data:\nx\n" == capsys.readouterr().out

    @pytest.mark.parametrize(
        "listing, code, out",
        [("ami-id\nhostname\n", 0, "true\n"), ("", 1, "false\n")],
    )
    def test_exists(self, listing, code, out, host, m_subp, capsys):
        host(available=("curl",))
        m_subp.return_value = subp_ok(listing)
        assert code == main.main(["exists"])
        assert out == capsys.readouterr().out

    def test_transport(self, host, capsys):
        host(available=("wget",))
        assert 0 == main.main(["transport"])
        assert "wget\n" == capsys.readouterr().out

    def test_skipped_resource(self, host, m_subp, capsys):
        host()
        assert 1 == main.main(["--timeout", "later", "get", "user-data"])
        assert "skipped: timeout is not numeric" in capsys.readouterr().err
        m_subp.assert_not_called()

    def test_options_from_config_file(self, host, m_subp, tmp_path):
        cfg = tmp_path / "ec2.yaml"
        cfg.write_text(
            "ec2_instance:\n  version: '2016-06-30'\n  timeout: 3\n"
        )
        host(available=("curl",))
        m_subp.return_value = subp_ok("")
        main.main(["--config", str(cfg), "--timeout", "7", "get", "user-data"])
        cmd = m_subp.call_args.args[0]
        assert "7" == cmd[cmd.index("--connect-timeout") + 1]
        assert "http://169.254.169.254/2016-06-30/user-data" == cmd[-1]

    def test_bad_config_file(self, host, tmp_path, capsys):
        host()
        assert 1 == main.main(
            ["--config", str(tmp_path / "missing.yaml"), "exists"]
        )
        assert "could not load config" in capsys.readouterr().err

    def test_action_required(self):
        with pytest.raises(SystemExit) as exc_info:
            main.main([])
        assert 2 == exc_info.value.code
