"""
Filesystem walker for smart-find.

This module lists files under the working tree for the semantic-listing
strategy when fd is not installed. It prunes the fixed exclude set while
walking and stops once the listing limit is reached.
"""

import os
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from ..models.search_command import EXCLUDE_SET


logger = logging.getLogger(__name__)


class FSWalker:
    """
    Filesystem walker that lists files relative to a root directory.

    Paths are yielded relative to the root with forward slashes, the same
    shape fd prints, so both listings can feed the same prompt.
    """

    def __init__(self, root: Optional[Union[str, Path]] = None, exclude: Iterable[str] = EXCLUDE_SET):
        """
        Initialize the filesystem walker.

        Args:
            root: Directory to walk (defaults to the current directory)
            exclude: Directory names pruned during traversal
        """
        self.root = Path(root) if root else Path.cwd()
        self.exclude = frozenset(exclude)
        self._stats = {
            'files_listed': 0,
            'directories_traversed': 0,
            'directories_pruned': 0,
            'errors': 0
        }

    def walk(self) -> Iterator[str]:
        """
        Yield file paths relative to the root, in traversal order.

        Subdirectories are visited in sorted order so listings are stable.
        """
        if not self.root.is_dir():
            logger.warning(f"Root path is not a directory: {self.root}")
            return

        for current_dir, subdirs, files in os.walk(self.root, onerror=self._on_error):
            self._stats['directories_traversed'] += 1

            kept = sorted(d for d in subdirs if d not in self.exclude)
            self._stats['directories_pruned'] += len(subdirs) - len(kept)
            subdirs[:] = kept

            relative_dir = Path(current_dir).relative_to(self.root)
            for filename in sorted(files):
                self._stats['files_listed'] += 1
                yield (relative_dir / filename).as_posix()

    def list_files(self, limit: int) -> List[str]:
        """
        List at most ``limit`` files under the root.

        Args:
            limit: Maximum number of paths to return

        Returns:
            Relative file paths
        """
        listing = []
        for path in self.walk():
            if len(listing) >= limit:
                logger.debug(f"Reached listing limit: {limit}")
                break
            listing.append(path)
        return listing

    def _on_error(self, error: OSError) -> None:
        logger.warning(f"Error walking {error.filename}: {error}")
        self._stats['errors'] += 1

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the walk.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()
