# topmark:header:start
#
#   project      : Tristat
#   file         : io.py
#   file_relpath : src/tristat/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load and layer TOML configuration sources.

Sources, lowest precedence first:

1. built-in defaults (`MutableConfig.from_defaults`)
2. ``[tool.tristat]`` in ``<root>/pyproject.toml``
3. ``<root>/tristat.toml`` (top-level keys, or a ``[status]`` table)
4. explicit ``--config`` files, in the order given
5. CLI overrides

Parsing is done with `tomlkit`. Unlike a missing file, a file that exists but
cannot be parsed is an error: silently falling back to defaults would change rename
detection behind the user's back.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from tristat.config.keys import Toml
from tristat.config.logging import get_logger
from tristat.config.model import Config, MutableConfig
from tristat.constants import PYPROJECT_TOML_NAME, TRISTAT_TOML_NAME
from tristat.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tristat.config.logging import TristatLogger

logger: TristatLogger = get_logger(__name__)

TomlTable = dict[str, Any]


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (e.g., ``tristat.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content as plain Python containers.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def extract_tristat_table(data: TomlTable, *, from_pyproject: bool) -> TomlTable:
    """Return the Tristat settings table from a parsed TOML document.

    Args:
        data: Parsed TOML document.
        from_pyproject: If True, read ``[tool.tristat]``; otherwise read the top
            level, merged with an optional ``[status]`` table.

    Returns:
        The settings table; empty when the document has none.

    Raises:
        ConfigError: If the settings section exists but is not a table.
    """
    if from_pyproject:
        tool: object = data.get(Toml.SECTION_TOOL, {})
        table: object = tool.get(Toml.SECTION_TRISTAT, {}) if isinstance(tool, dict) else {}
    else:
        table = {k: v for k, v in data.items() if k != Toml.SECTION_STATUS}
        status: object = data.get(Toml.SECTION_STATUS)
        if status is not None:
            if not isinstance(status, dict):
                raise ConfigError(f"'[{Toml.SECTION_STATUS}]' must be a table.")
            table.update(cast("TomlTable", status))
    if not isinstance(table, dict):
        raise ConfigError(f"'[{Toml.SECTION_TOOL}.{Toml.SECTION_TRISTAT}]' must be a table.")
    return cast("TomlTable", table)


def discover_config_files(root: Path) -> list[Path]:
    """Return the project-local config files under ``root``, lowest precedence first.

    A ``pyproject.toml`` without a ``[tool.tristat]`` table yields an empty layer.

    Args:
        root: Repository root directory.

    Returns:
        Existing config files in merge order.
    """
    found: list[Path] = []
    pyproject: Path = root / PYPROJECT_TOML_NAME
    if pyproject.is_file():
        found.append(pyproject)
    tristat_toml: Path = root / TRISTAT_TOML_NAME
    if tristat_toml.is_file():
        found.append(tristat_toml)
    logger.debug("Discovered config files under %s: %s", root, [str(p) for p in found])
    return found


def layer_from_file(path: Path) -> MutableConfig:
    """Parse one config file into a configuration layer.

    Args:
        path: A ``pyproject.toml`` or a Tristat TOML file.

    Returns:
        MutableConfig: A layer with only the keys present in the file set.
    """
    data: TomlTable = load_toml_dict(path)
    table: TomlTable = extract_tristat_table(data, from_pyproject=path.name == PYPROJECT_TOML_NAME)
    return MutableConfig.from_mapping(table, source=str(path))


def load_config(
    root: Path | None,
    *,
    config_paths: Iterable[str | Path] = (),
    no_config: bool = False,
    overrides: MutableConfig | None = None,
) -> Config:
    """Resolve the effective configuration for one invocation.

    Args:
        root: Repository root used for discovery, or None to skip discovery.
        config_paths: Explicit config files (``--config``), applied after discovery.
        no_config: If True, skip discovery of project-local files. Explicit
            ``config_paths`` are still honored.
        overrides: CLI overrides, applied last.

    Returns:
        Config: The frozen, validated configuration.

    Raises:
        ConfigError: If a source is unreadable or holds invalid values.
    """
    draft: MutableConfig = MutableConfig.from_defaults()
    draft.config_files = []

    files: list[Path] = []
    if root is not None and not no_config:
        files.extend(discover_config_files(root))
    for p in config_paths:
        path = Path(p)
        if not path.is_file():
            raise ConfigError(f"Configuration file not found: {path}")
        files.append(path)

    for path in files:
        draft = draft.merge_with(layer_from_file(path))
    if overrides is not None:
        draft = draft.merge_with(overrides)

    config: Config = draft.freeze()
    logger.debug("Effective configuration: %s (from %s)", config.to_dict(), config.config_files)
    return config
