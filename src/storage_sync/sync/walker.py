"""Depth-first traversal of a source tree."""

import logging
import os
from typing import Callable

logger = logging.getLogger(__name__)

PathCallback = Callable[[str], None]


def walk_source_files(source_root: str, on_file: PathCallback, on_dir: PathCallback) -> None:
    """Walk ``source_root`` depth-first, calling ``on_dir`` for every directory
    and ``on_file`` for every other entry.

    Directories are visited before their contents, and the entries of each
    directory in lexical order; ``source_root`` itself is the first directory
    reported. Symlinks below the root are reported as files and never followed.

    Walking stops at the first error: a directory that cannot be listed, or an
    exception raised by either callback, propagates to the caller unchanged.

    Args:
        source_root: Directory (or single file) to walk
        on_file: Called with the path of every non-directory entry
        on_dir: Called with the path of every directory, root included
    """
    try:
        is_dir = os.path.isdir(source_root)
        if not is_dir:
            # Surface a missing root instead of reporting it as a file
            os.lstat(source_root)
    except OSError as e:
        logger.error(f"Error walking path {source_root}: {e}")
        raise

    if not is_dir:
        on_file(source_root)
        return

    on_dir(source_root)
    _walk_dir(source_root, on_file, on_dir)


def _walk_dir(path: str, on_file: PathCallback, on_dir: PathCallback) -> None:
    try:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        logger.error(f"Error walking path {path}: {e}")
        raise

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            on_dir(entry.path)
            _walk_dir(entry.path, on_file, on_dir)
        else:
            on_file(entry.path)
