"""
go.sum handling.

Some go commands rewrite go.sum as a side effect. Callers take a snapshot
of the file (content and permission bits), remove it, run the command and
put the original back afterwards.
"""

import os
import re
import stat
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple

from gomodkit.console import debug
from gomodkit.errors import SumFileError

SUM_FILE_NAME = "go.sum"

# go.sum line for a go.mod checksum: "<module> <version>/go.mod h1:<hash>"
MODULE_ENTRY_IN_SUM_FILE_REGEXP = re.compile(r"([^\s]+) (v[^\/]+)\/go\.mod")


class SumFileSnapshot(NamedTuple):
    """Saved content and permission bits of a go.sum file."""

    content: bytes
    mode: int


def sum_file_path(root_project_dir: str | Path) -> Path:
    """Return the go.sum path of a module root."""
    return Path(root_project_dir) / SUM_FILE_NAME


def sum_file_exists(root_project_dir: str | Path) -> bool:
    """Check whether the module root has a go.sum file (directories don't count)."""
    return sum_file_path(root_project_dir).is_file()


def get_file_details(file_path: str | Path) -> tuple[bytes, os.stat_result]:
    """
    Read a file and stat it.

    Args:
        file_path: File to read.

    Returns:
        Tuple of (content, stat result).

    Raises:
        SumFileError: If the file cannot be stat'ed or read.
    """
    file_path = Path(file_path)
    try:
        file_stat = file_path.stat()
        content = file_path.read_bytes()
    except OSError as e:
        raise SumFileError(f"Failed to read {file_path}: {e}") from e
    return content, file_stat


def get_sum_content_and_remove(
    root_project_dir: str | Path,
) -> SumFileSnapshot | None:
    """
    Save go.sum and remove it from the module root.

    Args:
        root_project_dir: The module root.

    Returns:
        The snapshot to pass to restore_sum_file(), or None if there was no
        go.sum.

    Raises:
        SumFileError: If go.sum exists but cannot be read or removed.
    """
    if not sum_file_exists(root_project_dir):
        return None

    debug(f"Sum file exists: {root_project_dir}")
    path = sum_file_path(root_project_dir)
    content, file_stat = get_file_details(path)

    debug(f"Removing file: {path}")
    try:
        path.unlink()
    except OSError as e:
        raise SumFileError(f"Failed to remove {path}: {e}") from e

    return SumFileSnapshot(content=content, mode=stat.S_IMODE(file_stat.st_mode))


def restore_sum_file(root_project_dir: str | Path, snapshot: SumFileSnapshot) -> None:
    """
    Write a saved go.sum back.

    The permission bits are applied with chmod so they match the saved
    file exactly, whatever the umask is.

    Raises:
        SumFileError: If the file cannot be written.
    """
    path = sum_file_path(root_project_dir)
    debug(f"Restoring file: {path}")
    try:
        path.write_bytes(snapshot.content)
        os.chmod(path, snapshot.mode)
    except OSError as e:
        raise SumFileError(f"Failed to restore {path}: {e}") from e


@contextmanager
def preserved_sum_file(root_project_dir: str | Path) -> Iterator[SumFileSnapshot | None]:
    """
    Remove go.sum for the duration of the block and restore it afterwards.

    If there was no go.sum to begin with, nothing is restored and whatever
    the block created is left in place.

    Example:
        with preserved_sum_file(project_dir):
            run_go_mod_graph(project_dir)
    """
    snapshot = get_sum_content_and_remove(root_project_dir)
    try:
        yield snapshot
    finally:
        if snapshot is not None:
            restore_sum_file(root_project_dir, snapshot)


def print_go_sum_content(root_project_dir: str | Path) -> None:
    """Print go.sum as debug output, if the module root has one."""
    debug("Checking go.sum content")
    if not sum_file_exists(root_project_dir):
        return
    content, _ = get_file_details(sum_file_path(root_project_dir))
    debug(f"Sum file content: {content.decode('utf-8', errors='replace')}")


def fetch_modules_from_go_sum(root_project_dir: str | Path) -> list[str]:
    """
    List the modules declared in go.sum.

    Only "/go.mod" checksum lines are used; every module version has
    exactly one of those, while the matching zip checksum line is missing
    for modules that were never downloaded.

    Args:
        root_project_dir: The module root.

    Returns:
        "module@version" strings in file order. Empty if there is no go.sum.
    """
    debug("Fetching go modules declared in go.sum")
    if not sum_file_exists(root_project_dir):
        return []

    content, _ = get_file_details(sum_file_path(root_project_dir))
    modules = []
    for line in content.decode("utf-8", errors="replace").splitlines():
        match = MODULE_ENTRY_IN_SUM_FILE_REGEXP.search(line)
        if match:
            modules.append(f"{match.group(1)}@{match.group(2)}")
    return modules


def modules_to_set(modules: Iterable[str]) -> set[str]:
    """Collect module identifiers into a set."""
    return set(modules)
