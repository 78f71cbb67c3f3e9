# This file is part of ec2-instance-check. See LICENSE file for license information.

from ec2instance.subp import ProcessExecutionError, SubpResult


def fake_which(*available):
    """Return a which() replacement that only finds the given programs."""

    def which(program):
        return "/usr/bin/%s" % program if program in available else None

    return which


def subp_ok(stdout="", stderr=""):
    return SubpResult(stdout, stderr)


def subp_fail(stdout="", stderr="", exit_code=22):
    return ProcessExecutionError(
        stdout=stdout, stderr=stderr, exit_code=exit_code
    )
