# topmark:header:start
#
#   project      : Tristat
#   file         : api.py
#   file_relpath : src/tristat/rendering/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render a `StatusReport` for a verbosity tier and an output format.

`render` is a pure function of its arguments: the same report, tier and format
always produce the same bytes. Nothing is printed here; the caller writes
`RenderedOutput.text` once the whole document has been built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tristat.config.logging import get_logger
from tristat.core.errors import RenderError
from tristat.core.exit_codes import ExitCode
from tristat.core.formats import OutputFormat
from tristat.core.machine.payloads import build_meta_payload
from tristat.rendering.text import render_text
from tristat.status.machine.serializers import serialize_status_json

if TYPE_CHECKING:
    from tristat.config.logging import TristatLogger
    from tristat.core.tiers import VerbosityTier
    from tristat.status.model import StatusReport

logger: TristatLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RenderedOutput:
    """A fully rendered document and the exit code it implies.

    Attributes:
        text (str): The document, without a trailing newline.
        exit_code (ExitCode): `ExitCode.CLEAN` or `ExitCode.DIRTY` for status
            reports; `ExitCode.CLEAN` for help and version output.
    """

    text: str
    exit_code: ExitCode


def render(
    report: StatusReport,
    tier: VerbosityTier,
    fmt: OutputFormat,
    *,
    fingerprint_width: int = 7,
    color: bool = False,
) -> RenderedOutput:
    """Render ``report``.

    Args:
        report (StatusReport): The report to render.
        tier (VerbosityTier): Requested tier (ignored by JSON, which is always complete).
        fmt (OutputFormat): Output format.
        fingerprint_width (int): Hex digits shown per fingerprint in very-verbose text.
        color (bool): Apply ANSI colors to text output. JSON is never colored.

    Returns:
        RenderedOutput: The document and the exit code implied by ``report.clean``.

    Raises:
        RenderError: If the tier or format is unsupported.
    """
    try:
        if fmt is OutputFormat.TEXT:
            text: str = render_text(
                report, tier, fingerprint_width=fingerprint_width, color=color
            )
        elif fmt is OutputFormat.JSON:
            text = serialize_status_json(meta=build_meta_payload(), report=report)
        else:
            raise RenderError(f"Unsupported output format: {fmt!r}")
    except RenderError:
        logger.exception("Rendering failed (tier=%s, format=%s)", tier, fmt)
        raise

    exit_code: ExitCode = ExitCode.CLEAN if report.clean else ExitCode.DIRTY
    logger.debug("Rendered %d character(s) (%s, %s)", len(text), tier.key, fmt.value)
    return RenderedOutput(text=text, exit_code=exit_code)
