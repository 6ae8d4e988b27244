"""Real ShellProbe implementation."""

import logging
import os
from collections.abc import Mapping

from jdk_pulse.core.cancellation import CancelToken
from jdk_pulse.core.non_ideal_state import ProbeFailure, ProbeSpawnFailed
from jdk_pulse.core.shell_probe import PROBE_SCRIPT, ShellSnapshot, parse_probe_output
from jdk_pulse.core.subprocess_utils import CompletedRun, describe_command, run_bounded
from jdk_pulse.gateway.shell_probe.abc import ShellProbe

logger = logging.getLogger(__name__)

# Set by the hook; removed so the probed shell applies the state file afresh
_APPLIED_MARKER_VAR = "_JDK_PULSE_APPLIED"


class RealShellProbe(ShellProbe):
    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def probe(
        self, shell_path: str, *, timeout: float, cancel: CancelToken | None
    ) -> ShellSnapshot | ProbeFailure:
        cmd = [shell_path, "-i", "-c", PROBE_SCRIPT]
        env = {k: v for k, v in self._environ.items() if k != _APPLIED_MARKER_VAR}
        result = run_bounded(cmd, timeout=timeout, cancel=cancel, env=env)
        if not isinstance(result, CompletedRun):
            return result
        snapshot = parse_probe_output(shell_path, result.stdout)
        if snapshot is None:
            logger.debug("Probe output from %s:\n%s", shell_path, result.stdout)
            return ProbeSpawnFailed(
                command=describe_command(cmd),
                reason=f"shell exited with status {result.returncode} before the probe ran",
            )
        return snapshot
