# topmark:header:start
#
#   project      : Tristat
#   file         : __init__.py
#   file_relpath : src/tristat/api/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public Tristat API (stable surface).

This module exposes a small, typed API for integrations that want repository
status without going through the CLI.

- `status()` runs the whole chain on a git working copy and returns the report
  together with the rendered document.
- `compute_status()` accepts any `StateProvider`, e.g. an in-memory one for tests.
- `render()` and `render_help()` are pure projections.

Configuration contract
----------------------
Functions accept either a plain mapping mirroring the TOML keys or a frozen
[`tristat.config.Config`][]. Mappings are validated the same way as
configuration files:

```python
from tristat import api

run = api.status(".", config={"rename_threshold": 0.6, "detect_copies": True})
print(run.output.text)
```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tristat.api.runtime import StatusRun, run_status
from tristat.config.model import Config
from tristat.core.formats import OutputFormat
from tristat.core.tiers import VerbosityTier
from tristat.rendering.api import RenderedOutput
from tristat.rendering.api import render as _render
from tristat.rendering.help import render_help
from tristat.status.engine import compute_status

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

    from tristat.status.model import StatusReport

__all__ = [
    "RenderedOutput",
    "StatusRun",
    "compute_status",
    "render",
    "render_help",
    "status",
]


def render(
    report: StatusReport,
    tier: VerbosityTier = VerbosityTier.TERSE,
    fmt: OutputFormat = OutputFormat.TEXT,
    config: Config | None = None,
    *,
    color: bool = False,
) -> RenderedOutput:
    """Render a report.

    Args:
        report (StatusReport): The report.
        tier (VerbosityTier): Requested tier.
        fmt (OutputFormat): Output format.
        config (Config | None): Supplies ``fingerprint_width``; defaults when None.
        color (bool): Colorize text output.

    Returns:
        RenderedOutput: The document and the exit code implied by the report.
    """
    effective: Config = config if config is not None else Config()
    return _render(report, tier, fmt, fingerprint_width=effective.fingerprint_width, color=color)


def status(
    start: Path | str = ".",
    *,
    tier: VerbosityTier = VerbosityTier.TERSE,
    fmt: OutputFormat = OutputFormat.TEXT,
    config: Mapping[str, object] | Config | None = None,
    pathspecs: Iterable[str] = (),
    no_config: bool = False,
) -> StatusRun:
    """Report the status of the git working copy containing ``start``.

    Git never prompts when called through the API.

    Args:
        start (Path | str): Any directory inside the working copy.
        tier (VerbosityTier): Requested tier.
        fmt (OutputFormat): Output format.
        config (Mapping[str, object] | Config | None): Overrides or a complete config.
        pathspecs (Iterable[str]): Restrict the report to matching paths.
        no_config (bool): Skip ``pyproject.toml`` / ``tristat.toml`` discovery.

    Returns:
        StatusRun: Report, rendered output and effective config.
    """
    return run_status(
        start,
        tier=tier,
        fmt=fmt,
        config=config,
        no_config=no_config,
        pathspecs=pathspecs,
        non_interactive=True,
    )
