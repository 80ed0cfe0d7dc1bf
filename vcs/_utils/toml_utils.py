from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from vcs._compat import tomllib


class TomlError(Exception):
    def __init__(self, message: str, lineno: int = 0, colno: int = 0):
        super().__init__(message)
        self.lineno = lineno
        self.colno = colno


def load_toml_from_path(path: Path) -> dict[str, Any]:
    """Load TOML from file path.

    Args:
        path: Path to the TOML file

    Returns:
        Dictionary loaded from TOML

    Raises:
        TomlError: If TOML parsing fails, with file path included
    """
    try:
        with path.open("rb") as file:
            return tomllib.load(file)
    except tomllib.TOMLDecodeError as exc:
        msg = f"TOML parsing error in file '{path}': {getattr(exc, 'msg', str(exc))}"
        raise TomlError(
            message=msg,
            lineno=int(getattr(exc, "lineno", 0)),
            colno=int(getattr(exc, "colno", 0)),
        ) from exc


def load_toml_from_path_if_exists(path: Path) -> dict[str, Any] | None:
    """Load TOML from path if it exists."""
    if not path.is_file():
        return None
    return load_toml_from_path(path)


def load_toml_with_tomlkit(path: Path) -> tomlkit.TOMLDocument:
    """Load TOML using tomlkit to preserve formatting and comments.

    A missing file yields an empty document.
    """
    if not path.is_file():
        return tomlkit.document()
    try:
        with path.open(encoding="utf-8") as file:
            return tomlkit.load(file)
    except TOMLKitError as exc:
        msg = f"TOML parsing error in file '{path}': {exc}"
        raise TomlError(
            message=msg,
            lineno=int(getattr(exc, "line", 0)),
            colno=int(getattr(exc, "col", 0)),
        ) from exc


def save_toml_to_path(data: dict[str, Any] | tomlkit.TOMLDocument, path: Path) -> None:
    """Save dictionary as TOML to path, preserving formatting and comments.

    Args:
        data: Dictionary or TOMLDocument to save as TOML
        path: Path where the TOML file should be saved
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as file:
        tomlkit.dump(data, file)  # type: ignore[arg-type]
