# topmark:header:start
#
#   project      : Tristat
#   file         : runtime.py
#   file_relpath : src/tristat/api/runtime.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Runtime helpers behind the public API: config resolution and one status run.

The order of operations is fixed:

1. locate the repository (the provider constructor fails fast outside one);
2. resolve the configuration against the repository root;
3. read all state and build the report;
4. render the whole document.

Nothing is printed here, so an error at any step leaves stdout untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from tristat.config.io import load_config
from tristat.config.logging import get_logger
from tristat.config.model import Config, MutableConfig
from tristat.rendering.api import RenderedOutput, render
from tristat.status.engine import compute_status, rename_detection_enabled
from tristat.status.git_provider import GitStateProvider

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from tristat.config.logging import TristatLogger
    from tristat.core.formats import OutputFormat
    from tristat.core.tiers import VerbosityTier
    from tristat.status.model import StatusReport

logger: TristatLogger = get_logger(__name__)

OVERRIDES_SOURCE = "<overrides>"


@dataclass(frozen=True, slots=True)
class StatusRun:
    """Everything produced by one status invocation.

    Attributes:
        report (StatusReport): The immutable report.
        output (RenderedOutput): The rendered document and its exit code.
        config (Config): The configuration the run used.
    """

    report: StatusReport
    output: RenderedOutput
    config: Config


def resolve_config(
    root: Path | str | None,
    config: Mapping[str, object] | Config | None = None,
    *,
    config_paths: Iterable[str | Path] = (),
    no_config: bool = False,
) -> Config:
    """Return the effective configuration for a run.

    A frozen `Config` is used as is. A mapping is applied on top of the
    discovered files, like CLI flags.

    Args:
        root (Path | str | None): Repository root used for discovery.
        config (Mapping[str, object] | Config | None): Overrides or a complete config.
        config_paths (Iterable[str | Path]): Extra config files.
        no_config (bool): Skip discovery of project-local config files.

    Returns:
        Config: The frozen configuration.

    Raises:
        ConfigError: If a source is unreadable or holds invalid values.
    """
    if isinstance(config, Config):
        return config
    overrides: MutableConfig | None = (
        MutableConfig.from_mapping(config, source=OVERRIDES_SOURCE) if config else None
    )
    return load_config(
        Path(root) if root is not None else None,
        config_paths=config_paths,
        no_config=no_config,
        overrides=overrides,
    )


def run_status(
    start: Path | str = ".",
    *,
    tier: VerbosityTier,
    fmt: OutputFormat,
    config: Mapping[str, object] | Config | None = None,
    config_paths: Iterable[str | Path] = (),
    no_config: bool = False,
    pathspecs: Iterable[str] = (),
    non_interactive: bool = False,
    color: bool = False,
) -> StatusRun:
    """Compute and render the status of the working copy containing ``start``.

    Args:
        start (Path | str): Any directory inside the working copy.
        tier (VerbosityTier): Requested tier.
        fmt (OutputFormat): Output format.
        config (Mapping[str, object] | Config | None): Overrides or a complete config.
        config_paths (Iterable[str | Path]): Extra config files.
        no_config (bool): Skip discovery of project-local config files.
        pathspecs (Iterable[str]): Restrict the report to matching paths.
        non_interactive (bool): Never let git prompt.
        color (bool): Colorize text output.

    Returns:
        StatusRun: Report, rendered output and effective config.

    Raises:
        StateReadError: If the repository cannot be read.
        ConfigError: If the configuration is invalid.
        RenderError: If rendering fails.
    """
    provider = GitStateProvider(start, non_interactive=non_interactive)
    effective: Config = resolve_config(
        provider.root, config, config_paths=config_paths, no_config=no_config
    )
    provider.workers = effective.workers

    report: StatusReport = compute_status(
        provider,
        effective,
        detect_renames=rename_detection_enabled(effective, tier=tier, fmt=fmt),
        pathspecs=pathspecs,
    )
    output: RenderedOutput = render(
        report, tier, fmt, fingerprint_width=effective.fingerprint_width, color=color
    )
    return StatusRun(report=report, output=output, config=effective)
