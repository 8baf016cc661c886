"""
Filesystem helpers shared by the sync policies.
"""

from __future__ import annotations

import hashlib
import os
import shutil
from pathlib import Path
from typing import Iterator

from automaton.core.models import DiscoveredFile


def iter_source_files(root: Path) -> Iterator[DiscoveredFile]:
    """Yield every regular file under root, recursively.

    A missing root yields nothing. File symlinks that resolve are treated as
    regular files; directory symlinks are not descended.
    """
    if not root.is_dir():
        return
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        current = Path(dirpath)
        for filename in sorted(filenames):
            path = current / filename
            if not path.is_file():
                continue
            yield DiscoveredFile(absolute_path=path, relative_path=path.relative_to(root))


def iter_flat_files(root: Path) -> Iterator[DiscoveredFile]:
    """Yield the regular files directly under root."""
    if not root.is_dir():
        return
    for path in sorted(root.iterdir()):
        if path.is_file():
            yield DiscoveredFile(absolute_path=path, relative_path=Path(path.name))


def iter_directories(root: Path) -> Iterator[Path]:
    """Yield every directory under root as a root-relative path."""
    if not root.is_dir():
        return
    for dirpath, dirnames, _ in os.walk(root):
        dirnames.sort()
        current = Path(dirpath)
        for dirname in dirnames:
            path = current / dirname
            if path.is_symlink():
                continue
            yield path.relative_to(root)


def iter_entries(root: Path) -> Iterator[Path]:
    """Yield every non-directory entry under root as a root-relative path.

    Unlike iter_source_files this includes dangling symlinks and symlinks to
    directories, so a mirror can account for everything it finds.
    """
    if not root.is_dir():
        return
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        current = Path(dirpath)
        for dirname in dirnames:
            path = current / dirname
            if path.is_symlink():
                yield path.relative_to(root)
        for filename in sorted(filenames):
            yield (current / filename).relative_to(root)


def flat_name(name: str, suffix: str) -> str:
    """Insert suffix before the extension: ``alpha.md`` -> ``alpha.prompt.md``."""
    stem, ext = os.path.splitext(name)
    return f"{stem}{suffix}{ext}"


def entry_exists(path: Path) -> bool:
    """True for any directory entry, including dangling symlinks."""
    return path.exists() or path.is_symlink()


def _hash_file(path: Path, chunk_size: int = 1024 * 1024) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        while chunk := handle.read(chunk_size):
            digest.update(chunk)
    return digest.hexdigest()


def files_identical(source: Path, destination: Path) -> bool:
    """Byte-for-byte comparison of two existing files."""
    if source.stat().st_size != destination.stat().st_size:
        return False
    return _hash_file(source) == _hash_file(destination)


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def copy_file(source: Path, destination: Path) -> None:
    """Copy source to destination, replacing a symlink instead of writing through it."""
    ensure_parent(destination)
    if destination.is_symlink():
        destination.unlink()
    elif destination.is_dir():
        raise IsADirectoryError(f"Destination is a directory: {destination}")
    shutil.copy2(source, destination)


def same_file(path: Path, other: Path) -> bool:
    """True when both paths exist and lead to the same file on disk."""
    return path.exists() and other.exists() and os.path.samefile(path, other)


def is_within(path: Path, root: Path) -> bool:
    """True when path resolves to root or to something below it."""
    return path.resolve().is_relative_to(root.resolve())


def link_file(source: Path, destination: Path) -> bool:
    """Point destination at source, replacing any existing file or link.

    A destination that already leads to source (a link to it, or the source
    itself reached through a linked directory) is left alone and False is
    returned.
    """
    target = source.resolve()
    if same_file(destination, target):
        return False
    ensure_parent(destination)
    if entry_exists(destination):
        destination.unlink()
    destination.symlink_to(target)
    return True


def prune_empty_directories(root: Path, keep: set[Path]) -> list[Path]:
    """Remove empty directories under root whose relative path is not in keep.

    Walks bottom-up so nested empty directories collapse. The root itself is
    never removed. Returns the removed directories.
    """
    removed: list[Path] = []
    if not root.is_dir():
        return removed
    for dirpath, _, _ in os.walk(root, topdown=False):
        current = Path(dirpath)
        if current == root or current.relative_to(root) in keep:
            continue
        if not any(current.iterdir()):
            current.rmdir()
            removed.append(current)
    return removed
