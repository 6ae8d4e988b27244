"""Application context with dependency injection."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from jdk_pulse.core.config import GlobalConfig
from jdk_pulse.core.hook_manager import HookManager
from jdk_pulse.core.platform import PlatformFamily, detect_platform, well_known_jdk_roots
from jdk_pulse.core.registry import JdkRegistry
from jdk_pulse.core.shells import detect_login_shell
from jdk_pulse.core.types import ShellKind
from jdk_pulse.gateway.config_store.abc import ConfigStore
from jdk_pulse.gateway.config_store.real import RealConfigStore, default_config_path
from jdk_pulse.gateway.env_propagation.abc import EnvPropagator
from jdk_pulse.gateway.env_propagation.dry_run import DryRunEnvPropagator
from jdk_pulse.gateway.env_propagation.real import default_propagator
from jdk_pulse.gateway.jdk_source.abc import JdkSource
from jdk_pulse.gateway.jdk_source.real import default_sources
from jdk_pulse.gateway.shell_probe.abc import ShellProbe
from jdk_pulse.gateway.shell_probe.real import RealShellProbe
from jdk_pulse.gateway.state_store.abc import StateStore
from jdk_pulse.gateway.state_store.dry_run import DryRunStateStore
from jdk_pulse.gateway.state_store.real import RealStateStore
from jdk_pulse.gateway.tool_locator.abc import ToolLocator
from jdk_pulse.gateway.tool_locator.real import RealToolLocator


@dataclass(frozen=True)
class JdkPulseContext:
    """Immutable context holding all dependencies for jdk-pulse operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    registry: JdkRegistry
    state_store: StateStore
    hook_manager: HookManager
    propagator: EnvPropagator
    shell_probe: ShellProbe
    tool_locator: ToolLocator
    config_store: ConfigStore
    global_config: GlobalConfig
    home_dir: Path
    environ: Mapping[str, str]
    platform: PlatformFamily
    dry_run: bool

    @property
    def login_shell(self) -> str | None:
        """Path of the user's shell executable from ``$SHELL``."""
        return self.environ.get("SHELL") or None

    @property
    def configured_shells(self) -> tuple[ShellKind, ...]:
        """Shells whose hooks the doctor checks: configured, else the login shell."""
        if self.global_config.shells:
            return self.global_config.shells
        detected = detect_login_shell(self.environ)
        return (detected,) if detected is not None else ()

    def with_dry_run(self) -> "JdkPulseContext":
        """Same context with mutating gateways wrapped to print instead of act."""
        if self.dry_run:
            return self
        return replace(
            self,
            state_store=DryRunStateStore(self.state_store),
            propagator=DryRunEnvPropagator(self.propagator),
            dry_run=True,
        )

    @staticmethod
    def for_test(
        *,
        home_dir: Path,
        sources: list[JdkSource] | None = None,
        preferred_roots: list[Path] | None = None,
        state_store: StateStore | None = None,
        propagator: EnvPropagator | None = None,
        shell_probe: ShellProbe | None = None,
        tool_locator: ToolLocator | None = None,
        config_store: ConfigStore | None = None,
        global_config: GlobalConfig | None = None,
        environ: Mapping[str, str] | None = None,
        platform: PlatformFamily = "linux",
        dry_run: bool = False,
    ) -> "JdkPulseContext":
        """Create test context with fake implementations.

        Hooks are edited for real under ``home_dir``, so pass ``tmp_path``.

        Example:
            >>> ctx = JdkPulseContext.for_test(home_dir=tmp_path, sources=[FakeJdkSource(...)])
        """
        from jdk_pulse.gateway.config_store.fake import FakeConfigStore
        from jdk_pulse.gateway.env_propagation.fake import FakeEnvPropagator
        from jdk_pulse.gateway.shell_probe.fake import FakeShellProbe
        from jdk_pulse.gateway.state_store.fake import FakeStateStore
        from jdk_pulse.gateway.tool_locator.fake import FakeToolLocator

        if state_store is None:
            state_store = FakeStateStore(path=home_dir / ".jdk_current")
        if global_config is None:
            global_config = GlobalConfig.test(state_store.path)
        if environ is None:
            environ = {"HOME": str(home_dir), "SHELL": "/bin/bash"}
        if config_store is None:
            config_store = FakeConfigStore(config=global_config, home_dir=home_dir)

        ctx = JdkPulseContext(
            registry=JdkRegistry(
                sources if sources is not None else [],
                preferred_roots=preferred_roots if preferred_roots is not None else [],
            ),
            state_store=state_store,
            hook_manager=HookManager(
                home_dir=home_dir, state_file=state_store.path, environ=environ
            ),
            propagator=propagator if propagator is not None else FakeEnvPropagator(),
            shell_probe=shell_probe if shell_probe is not None else FakeShellProbe(),
            tool_locator=tool_locator if tool_locator is not None else FakeToolLocator(),
            config_store=config_store,
            global_config=global_config,
            home_dir=home_dir,
            environ=environ,
            platform=platform,
            dry_run=False,
        )
        return ctx.with_dry_run() if dry_run else ctx


def create_context(*, dry_run: bool) -> JdkPulseContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.
    """
    home_dir = Path.home()
    environ = os.environ
    platform = detect_platform()

    # 1. Load global config (defaults when the file is missing or malformed)
    config_store = RealConfigStore(path=default_config_path(home_dir), home_dir=home_dir)
    global_config = config_store.load()

    # 2. Discovery strategies for this platform
    sources = default_sources(
        platform,
        home_dir=home_dir,
        environ=environ,
        extra_dirs=list(global_config.extra_jdk_dirs),
        timeout=global_config.probe_timeout,
    )
    registry = JdkRegistry(
        sources,
        preferred_roots=well_known_jdk_roots(platform, home_dir=home_dir, environ=environ),
    )

    # 3. Canonical state and its consumers
    state_store = RealStateStore(global_config.state_file)
    hook_manager = HookManager(
        home_dir=home_dir, state_file=global_config.state_file, environ=environ
    )
    propagator = default_propagator(
        platform,
        enabled=global_config.propagation == "auto",
        timeout=global_config.probe_timeout,
    )

    ctx = JdkPulseContext(
        registry=registry,
        state_store=state_store,
        hook_manager=hook_manager,
        propagator=propagator,
        shell_probe=RealShellProbe(environ=environ),
        tool_locator=RealToolLocator(),
        config_store=config_store,
        global_config=global_config,
        home_dir=home_dir,
        environ=environ,
        platform=platform,
        dry_run=False,
    )
    return ctx.with_dry_run() if dry_run else ctx
