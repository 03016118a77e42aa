# topmark:header:start
#
#   project      : Tristat
#   file         : model.py
#   file_relpath : src/tristat/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot consumed by the status engine and
      the renderers.
    - `MutableConfig`: a mutable builder used during discovery/merge; it can be
      frozen into `Config` and thawed back for edits.

Tri-state fields:
    Every `MutableConfig` option is ``None`` until a layer sets it. Merging is
    last-wins per field, and `MutableConfig.freeze` fills whatever is still unset
    from the built-in defaults. That way a layer which only sets ``workers`` does
    not reset ``rename_threshold`` to its default.

Out of scope:
    TOML I/O and discovery live in `tristat.config.io`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from tristat.config.keys import ALL_KEYS, Toml
from tristat.config.logging import get_logger
from tristat.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from tristat.config.logging import TristatLogger

logger: TristatLogger = get_logger(__name__)

DEFAULT_RENAME_THRESHOLD: Final[float] = 0.5
DEFAULT_FINGERPRINT_WIDTH: Final[int] = 7
DEFAULT_WORKERS: Final[int] = 4

MIN_FINGERPRINT_WIDTH: Final[int] = 4
MAX_FINGERPRINT_WIDTH: Final[int] = 40


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for Tristat.

    Attributes:
        rename_threshold (float): Minimum similarity (0..1) for a deleted/added pair to be
            reported as a rename or copy.
        detect_renames (bool): Whether rename detection runs at all.
        detect_copies (bool): Whether added paths are also matched against unchanged HEAD
            paths and reported as copies.
        fast (bool): Skip rename/copy detection. Only honored for terse text output.
        fingerprint_width (int): Number of hex digits shown per fingerprint at the
            very-verbose tier.
        workers (int): Thread count used to fingerprint working tree files.
        config_files (tuple[str, ...]): Configuration sources that contributed, in merge order.
    """

    rename_threshold: float = DEFAULT_RENAME_THRESHOLD
    detect_renames: bool = True
    detect_copies: bool = False
    fast: bool = False
    fingerprint_width: int = DEFAULT_FINGERPRINT_WIDTH
    workers: int = DEFAULT_WORKERS
    config_files: tuple[str, ...] = ()

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config.

        Returns:
            MutableConfig: A mutable builder initialized from this snapshot.
        """
        return MutableConfig(
            rename_threshold=self.rename_threshold,
            detect_renames=self.detect_renames,
            detect_copies=self.detect_copies,
            fast=self.fast,
            fingerprint_width=self.fingerprint_width,
            workers=self.workers,
            config_files=list(self.config_files),
        )

    def to_dict(self) -> dict[str, object]:
        """Return the options as a plain mapping keyed by TOML key."""
        return {
            Toml.KEY_RENAME_THRESHOLD: self.rename_threshold,
            Toml.KEY_DETECT_RENAMES: self.detect_renames,
            Toml.KEY_DETECT_COPIES: self.detect_copies,
            Toml.KEY_FAST: self.fast,
            Toml.KEY_FINGERPRINT_WIDTH: self.fingerprint_width,
            Toml.KEY_WORKERS: self.workers,
        }


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Attributes:
        rename_threshold (float | None): See `Config.rename_threshold`; None = unset.
        detect_renames (bool | None): See `Config.detect_renames`; None = unset.
        detect_copies (bool | None): See `Config.detect_copies`; None = unset.
        fast (bool | None): See `Config.fast`; None = unset.
        fingerprint_width (int | None): See `Config.fingerprint_width`; None = unset.
        workers (int | None): See `Config.workers`; None = unset.
        config_files (list[str]): Contributing sources, in merge order.
    """

    rename_threshold: float | None = None
    detect_renames: bool | None = None
    detect_copies: bool | None = None
    fast: bool | None = None
    fingerprint_width: int | None = None
    workers: int | None = None
    config_files: list[str] = field(default_factory=lambda: [])

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated with the built-in defaults.

        Returns:
            MutableConfig: Builder with every option set.
        """
        return Config().thaw()

    @classmethod
    def from_mapping(cls, data: Mapping[str, object], *, source: str) -> MutableConfig:
        """Build a layer from a parsed TOML table.

        Unknown keys are logged and ignored so newer config files keep working with
        older releases. Known keys are type-checked.

        Args:
            data (Mapping[str, object]): The ``[tool.tristat]`` table or the top level
                of ``tristat.toml``.
            source (str): Name of the source, used in error messages.

        Returns:
            MutableConfig: A layer with only the keys present in ``data`` set.

        Raises:
            ConfigError: If a known key holds a value of the wrong type.
        """
        layer = cls(config_files=[source])
        for key, value in data.items():
            if key not in ALL_KEYS:
                logger.warning("Ignoring unknown configuration key '%s' in %s", key, source)
                continue
            if key == Toml.KEY_RENAME_THRESHOLD:
                layer.rename_threshold = _as_float(value, key=key, source=source)
            elif key == Toml.KEY_DETECT_RENAMES:
                layer.detect_renames = _as_bool(value, key=key, source=source)
            elif key == Toml.KEY_DETECT_COPIES:
                layer.detect_copies = _as_bool(value, key=key, source=source)
            elif key == Toml.KEY_FAST:
                layer.fast = _as_bool(value, key=key, source=source)
            elif key == Toml.KEY_FINGERPRINT_WIDTH:
                layer.fingerprint_width = _as_int(value, key=key, source=source)
            elif key == Toml.KEY_WORKERS:
                layer.workers = _as_int(value, key=key, source=source)
        return layer

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values explicitly set in ``other`` override this draft.

        Args:
            other (MutableConfig): The layer whose set values take precedence.

        Returns:
            MutableConfig: A new mutable configuration representing the merged result.
        """
        return MutableConfig(
            rename_threshold=other.rename_threshold
            if other.rename_threshold is not None
            else self.rename_threshold,
            detect_renames=other.detect_renames
            if other.detect_renames is not None
            else self.detect_renames,
            detect_copies=other.detect_copies
            if other.detect_copies is not None
            else self.detect_copies,
            fast=other.fast if other.fast is not None else self.fast,
            fingerprint_width=other.fingerprint_width
            if other.fingerprint_width is not None
            else self.fingerprint_width,
            workers=other.workers if other.workers is not None else self.workers,
            config_files=self.config_files + other.config_files,
        )

    def freeze(self) -> Config:
        """Validate this builder and freeze it into an immutable Config.

        Unset options take their built-in defaults.

        Returns:
            Config: The immutable runtime snapshot.

        Raises:
            ConfigError: If an option is out of range.
        """
        defaults = Config()
        threshold: float = (
            self.rename_threshold
            if self.rename_threshold is not None
            else defaults.rename_threshold
        )
        width: int = (
            self.fingerprint_width
            if self.fingerprint_width is not None
            else defaults.fingerprint_width
        )
        workers: int = self.workers if self.workers is not None else defaults.workers

        if not 0.0 <= threshold <= 1.0:
            raise ConfigError(
                f"'{Toml.KEY_RENAME_THRESHOLD}' must be between 0.0 and 1.0, got {threshold}."
            )
        if not MIN_FINGERPRINT_WIDTH <= width <= MAX_FINGERPRINT_WIDTH:
            raise ConfigError(
                f"'{Toml.KEY_FINGERPRINT_WIDTH}' must be between {MIN_FINGERPRINT_WIDTH} "
                f"and {MAX_FINGERPRINT_WIDTH}, got {width}."
            )
        if workers < 1:
            raise ConfigError(f"'{Toml.KEY_WORKERS}' must be at least 1, got {workers}.")

        return Config(
            rename_threshold=float(threshold),
            detect_renames=(
                self.detect_renames
                if self.detect_renames is not None
                else defaults.detect_renames
            ),
            detect_copies=(
                self.detect_copies if self.detect_copies is not None else defaults.detect_copies
            ),
            fast=self.fast if self.fast is not None else defaults.fast,
            fingerprint_width=width,
            workers=workers,
            config_files=tuple(self.config_files),
        )


def _as_bool(value: object, *, key: str, source: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"'{key}' in {source} must be a boolean, got {value!r}.")


def _as_int(value: object, *, key: str, source: str) -> int:
    # bool is a subclass of int; `workers = true` is a mistake, not 1.
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise ConfigError(f"'{key}' in {source} must be an integer, got {value!r}.")


def _as_float(value: object, *, key: str, source: str) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise ConfigError(f"'{key}' in {source} must be a number, got {value!r}.")
