"""Filesystem helpers for html-outline."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path

from .constants import HTML_EXTENSIONS
from .exceptions import ReadFileError


def _traverses_symlink(path: Path) -> bool:
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def _fingerprint(stat_result: os.stat_result) -> tuple[object, ...]:
    return (
        getattr(stat_result, "st_ino", None),
        getattr(stat_result, "st_dev", None),
        stat_result.st_size,
        stat_result.st_mtime_ns,
    )


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve an HTML filepath and make sure it stays under `base_dir`.

    Args:
        raw_path: User-supplied path (absolute, relative, or ``~``-prefixed).
        base_dir: Resolved working directory that constrains allowed paths.

    Returns:
        Path: Absolute path to the HTML file.

    Raises:
        ValueError: If the path goes through a symlink, cannot be resolved,
            lies outside `base_dir`, or lacks an HTML extension.

    Examples:
        normalize_filepath("site/index.html", Path.cwd().resolve())
    """
    path = Path(raw_path).expanduser()
    if _traverses_symlink(path):
        raise ValueError(f"Symlinks are not supported: {path}")

    try:
        resolved = path.resolve(strict=True)
    except OSError as error:
        raise ValueError(f"Cannot open {path}: {error}") from error

    if not resolved.is_relative_to(base_dir):
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.")

    if resolved.suffix.lower() not in HTML_EXTENSIONS:
        raise ValueError(
            f"{resolved} is not an HTML file (expected one of: {', '.join(HTML_EXTENSIONS)})"
        )

    return resolved


def stat_document(filepath: Path, max_size: int) -> os.stat_result:
    """Stat an HTML file before reading it.

    Args:
        filepath: Path to the file; symlinks are not followed.
        max_size: Largest accepted size in bytes.

    Returns:
        os.stat_result: Metadata used later to detect concurrent changes.

    Raises:
        IOError: If the file is missing, a symlink, not a regular file, or
            larger than `max_size`.
    """
    try:
        stat_result = os.lstat(filepath)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if stat.S_ISLNK(stat_result.st_mode):
        raise IOError(f"Symlinks are not supported: {filepath}")
    if not stat.S_ISREG(stat_result.st_mode):
        raise IOError(f"{filepath} is not a regular file.")
    if stat_result.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")

    return stat_result


def read_document(filepath: Path, expected_stat: os.stat_result | None = None) -> str:
    """Read an HTML file as UTF-8 text.

    Args:
        filepath: Path to the file.
        expected_stat: Stat from `stat_document`; when given, the read is
            rejected if the file changed in between.

    Returns:
        str: The file contents.

    Raises:
        ReadFileError: If the file cannot be opened, is not valid UTF-8, or
            changed while being read.

    Examples:
        html = read_document(path, stat_document(path, 1024 * 1024))
    """
    try:
        with open(filepath, "r", encoding="UTF-8") as file:
            content = file.read()
    except UnicodeDecodeError as error:
        raise ReadFileError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except OSError as error:
        raise ReadFileError(f"Error accessing {filepath}: {error}") from error

    if expected_stat is not None and _fingerprint(os.lstat(filepath)) != _fingerprint(expected_stat):
        raise ReadFileError(f"{filepath} changed while being read.")

    return content


def write_document(
    filepath: Path,
    content: str,
    expected_stat: os.stat_result,
    warn: Callable[[str], None] | None = None,
):
    """Atomically replace an HTML file with new content.

    Mode and, where permitted, ownership are carried over; the access time
    is restored to its value before the run.

    Args:
        filepath: Path to the file to rewrite.
        content: New document text.
        expected_stat: Stat taken before reading, used to detect races.
        warn: Optional callback for non-fatal warnings.

    Raises:
        IOError: If the file changed since `expected_stat` was taken or cannot
            be replaced.

    Examples:
        write_document(path, html, initial_stat)
    """
    if _fingerprint(os.lstat(filepath)) != _fingerprint(expected_stat):
        raise IOError(f"{filepath} changed during processing; refusing to overwrite.")

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent, suffix=".html"
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())

        os.chmod(temp_path, stat.S_IMODE(expected_stat.st_mode))
        if hasattr(os, "chown"):
            try:
                os.chown(temp_path, expected_stat.st_uid, expected_stat.st_gid)
            except PermissionError:
                if warn is not None:
                    warn(f"Warning: Could not preserve file ownership for {filepath.name}")

        os.replace(temp_path, filepath)
        os.utime(filepath, ns=(expected_stat.st_atime_ns, filepath.stat().st_mtime_ns))
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
