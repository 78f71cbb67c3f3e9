# This file is part of ec2-instance-check. See LICENSE file for license information.
"""Common utility functions for interacting with subprocess."""

import logging
import shutil
import subprocess
from collections import namedtuple
from typing import List, Optional

LOG = logging.getLogger(__name__)

SubpResult = namedtuple("SubpResult", ["stdout", "stderr"])


class ProcessExecutionError(IOError):
    MESSAGE_TMPL = (
        "%(description)s\n"
        "Command: %(cmd)s\n"
        "Exit code: %(exit_code)s\n"
        "Reason: %(reason)s\n"
        "Stdout: %(stdout)s\n"
        "Stderr: %(stderr)s"
    )
    empty_attr = "-"

    def __init__(
        self,
        stdout=None,
        stderr=None,
        exit_code=None,
        cmd=None,
        description=None,
        reason=None,
    ):
        self.cmd = cmd
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        self.exit_code = exit_code
        self.reason = reason
        if not description:
            if exit_code is None:
                description = "Unexpected error while running command."
            else:
                description = "Unexpected non-zero exit code."
        self.description = description

        IOError.__init__(
            self,
            self.MESSAGE_TMPL
            % {
                "description": self.description,
                "cmd": self.cmd or self.empty_attr,
                "exit_code": (
                    self.empty_attr if exit_code is None else exit_code
                ),
                "reason": self.reason or self.empty_attr,
                "stdout": self.stdout or self.empty_attr,
                "stderr": self.stderr or self.empty_attr,
            },
        )


def subp(
    args: List[str], capture: bool = True, timeout: Optional[float] = None
) -> SubpResult:
    """Run a command and return its output.

    :param args: command and its arguments, never run through a shell.
    :param capture: when False, output goes to the parent's stdout/stderr.
    :param timeout: seconds before the command is killed, None to wait.
    :return: SubpResult with decoded stdout and stderr.
    :raises: ProcessExecutionError on non-zero exit, on a timeout or when
        the command could not be started. The error carries whatever
        output was produced.
    """
    LOG.debug("Running command %s with allowed return codes [0]", args)
    stdout = stderr = None
    if capture:
        stdout = stderr = subprocess.PIPE
    try:
        proc = subprocess.run(
            args,
            stdout=stdout,
            stderr=stderr,
            stdin=subprocess.DEVNULL,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise ProcessExecutionError(
            stdout=_decode(e.stdout),
            stderr=_decode(e.stderr),
            cmd=args,
            reason="timed out after %s seconds" % timeout,
        ) from e
    except OSError as e:
        raise ProcessExecutionError(
            cmd=args,
            reason=e,
            exit_code=e.errno,
        ) from e
    out = _decode(proc.stdout)
    err = _decode(proc.stderr)
    if proc.returncode != 0:
        raise ProcessExecutionError(
            stdout=out, stderr=err, exit_code=proc.returncode, cmd=args
        )
    return SubpResult(out, err)


def which(program: str) -> Optional[str]:
    """Return the full path of an executable, or None if not runnable.

    A program containing a path separator is checked as given, a bare
    name is searched for on PATH.
    """
    return shutil.which(program)


def _decode(data) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
