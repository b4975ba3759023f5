"""
Result presentation for smart-find.

Hands the ranked paths to an interactive picker (fzf by default) and opens
whatever the user selects in an editor.
"""

import shutil
import subprocess
import logging
from typing import List

from .models.config import PresentationConfig
from .models.search_results import ResultSet


logger = logging.getLogger(__name__)


class Presenter:
    """Interactive picker and editor launcher."""

    def __init__(self, config: PresentationConfig):
        self.config = config

    def can_select(self) -> bool:
        """Check if the picker program is installed."""
        return bool(self.config.selector) and shutil.which(self.config.selector[0]) is not None

    def select(self, results: ResultSet) -> List[str]:
        """
        Let the user pick from the results.

        Returns:
            Selected paths; empty if the picker was cancelled
        """
        if results.is_empty():
            return []

        completed = subprocess.run(
            self.config.selector,
            input=results.to_lines(),
            stdout=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="surrogateescape",
        )
        # fzf exits 130 on Esc/Ctrl-C and 1 on no match
        if completed.returncode != 0:
            logger.debug(f"Picker exited with status {completed.returncode}")
            return []

        return [line.strip() for line in completed.stdout.splitlines() if line.strip()]

    def open(self, paths: List[str]) -> None:
        """Open the given paths in the configured editor."""
        if not paths or not self.config.editor:
            return

        try:
            subprocess.run([*self.config.editor, *paths], check=False)
        except FileNotFoundError:
            logger.warning(f"Editor not found: {self.config.editor[0]}")
