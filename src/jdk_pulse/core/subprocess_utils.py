"""Bounded, cancellable subprocess execution.

Every subprocess jdk-pulse starts (discovery commands, shell probes,
launchctl) goes through ``run_bounded`` so that a timeout or a cancellation
terminates the child instead of abandoning it.
"""

import logging
import os
import shlex
import signal
import subprocess
import sys
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from jdk_pulse.core.cancellation import CancelToken
from jdk_pulse.core.non_ideal_state import ProbeCancelled, ProbeSpawnFailed, ProbeTimeout

logger = logging.getLogger(__name__)

# How often a running child is checked for cancellation
_POLL_INTERVAL = 0.1


@dataclass(frozen=True)
class CompletedRun:
    """Output of a subprocess that exited on its own."""

    returncode: int
    stdout: str
    stderr: str


def describe_command(cmd: Sequence[str]) -> str:
    """Render a command for messages, eliding long inline scripts.

    The executable is always shown in full.
    """
    if not cmd:
        return ""
    args = [arg if len(arg) <= 60 else f"<{len(arg)} chars>" for arg in cmd[1:]]
    return shlex.join([cmd[0], *args])


def run_bounded(
    cmd: Sequence[str],
    *,
    timeout: float,
    cancel: CancelToken | None,
    env: Mapping[str, str] | None = None,
) -> CompletedRun | ProbeTimeout | ProbeSpawnFailed | ProbeCancelled:
    """Run ``cmd`` with stdin closed, capturing text output.

    Args:
        cmd: Command and arguments
        timeout: Seconds before the child is killed
        cancel: Optional token; when cancelled the child is killed
        env: Environment for the child (None inherits ours)

    Returns:
        CompletedRun when the child exited by itself, otherwise the reason it
        did not (the child has been killed and reaped in every case).
    """
    description = describe_command(cmd)
    logger.debug("Running %s (timeout=%ss)", description, timeout)
    try:
        proc = subprocess.Popen(
            list(cmd),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            env=dict(env) if env is not None else None,
            start_new_session=sys.platform != "win32",
        )
    except OSError as e:
        logger.debug("Could not start %s: %s", description, e)
        return ProbeSpawnFailed(command=description, reason=str(e))

    deadline = time.monotonic() + timeout
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            _terminate(proc)
            logger.debug("Timed out: %s", description)
            return ProbeTimeout(command=description, timeout_seconds=timeout)
        if cancel is not None and cancel.cancelled:
            _terminate(proc)
            logger.debug("Cancelled: %s", description)
            return ProbeCancelled(command=description)
        try:
            stdout, stderr = proc.communicate(timeout=min(_POLL_INTERVAL, remaining))
        except subprocess.TimeoutExpired:
            continue
        except BaseException:
            # KeyboardInterrupt does not reach a child in its own session
            _terminate(proc)
            raise
        return CompletedRun(returncode=proc.returncode, stdout=stdout, stderr=stderr)


def _terminate(proc: subprocess.Popen[str]) -> None:
    """Kill the child (and its process group on POSIX), then reap it.

    Output still buffered in the pipes is discarded. A daemon that left the
    process group can keep the pipes open indefinitely, so this waits for the
    child only, never for end-of-file.
    """
    try:
        if sys.platform != "win32":
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except (ProcessLookupError, PermissionError):
        proc.kill()
    proc.wait()
    for stream in (proc.stdout, proc.stderr):
        if stream is not None:
            stream.close()
