"""Recursive directory copy into the build tree.

Every run re-copies every file; there is no change detection. Symbolic links
are followed. Anything that does not resolve to a regular file or directory
(dangling links, FIFOs, sockets, devices) fails the copy, as does a directory
link that points back at a directory already being copied.
"""

import logging
import shutil
import stat
from pathlib import Path

from extgallery.core.errors import MaterializeError

logger = logging.getLogger(__name__)


def copy_tree(source: Path, destination: Path) -> int:
    """Copy the contents of source into destination.

    Creates destination and any missing ancestors, then copies each regular
    file byte-for-byte (overwriting existing files) and recurses into each
    subdirectory. Entries are visited in sorted name order.

    Args:
        source: Directory whose contents are copied
        destination: Directory receiving the copy

    Returns:
        Number of files copied

    Raises:
        MaterializeError: On the first entry that cannot be read, classified,
            or written; the copy stops there
    """
    copied = _copy_dir(source, destination, active=frozenset())
    logger.debug("Copied %d files from %s to %s", copied, source, destination)
    return copied


def _copy_dir(source: Path, destination: Path, active: frozenset[Path]) -> int:
    try:
        real_source = source.resolve(strict=True)
    except OSError as e:
        raise MaterializeError(f"Cannot read directory {source}: {e}") from e

    if real_source in active:
        raise MaterializeError(f"Directory link cycle at {source} (resolves to {real_source})")
    active = active | {real_source}

    try:
        destination.mkdir(parents=True, exist_ok=True)
        children = sorted(source.iterdir())
    except OSError as e:
        raise MaterializeError(f"Cannot copy {source} to {destination}: {e}") from e

    copied = 0
    for child in children:
        target = destination / child.name
        try:
            mode = child.stat().st_mode
        except OSError as e:
            raise MaterializeError(f"Cannot stat {child}: {e}") from e

        if stat.S_ISREG(mode):
            try:
                shutil.copyfile(child, target)
            except OSError as e:
                raise MaterializeError(f"Cannot copy {child} to {target}: {e}") from e
            copied += 1
        elif stat.S_ISDIR(mode):
            copied += _copy_dir(child, target, active)
        else:
            raise MaterializeError(f"Not a regular file or directory: {child}")
    return copied
