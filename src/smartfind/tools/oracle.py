"""
Text-generation oracle client for smart-find.

The oracle is an opaque text-in/text-out program: the prompt is passed as the
final argument of the configured command and the response is read from stdout.
There is no retry and no session; every failure degrades to an empty response.
"""

import subprocess
import logging
from typing import List, Optional

from ..models.config import OracleConfig


logger = logging.getLogger(__name__)


class OracleError(Exception):
    """Raised when the oracle cannot produce a usable response."""
    pass


class OracleClient:
    """
    Sends prompts to the configured oracle command.

    Calls are independent and share no state, so a single client can be
    used from several threads at once.
    """

    def __init__(self, config: Optional[OracleConfig] = None):
        self.config = config or OracleConfig()

    def ask(self, prompt: str) -> str:
        """
        Send one prompt and return the raw response text.

        Args:
            prompt: Complete prompt text

        Returns:
            Response text, or an empty string if the oracle failed or said nothing
        """
        try:
            return self._invoke(prompt)
        except OracleError as e:
            logger.warning(f"Oracle unavailable: {e}")
            return ""

    def _invoke(self, prompt: str) -> str:
        argv: List[str] = [*self.config.command, prompt]

        try:
            completed = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.config.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise OracleError(f"oracle program not found: {self.config.program}") from e
        except subprocess.TimeoutExpired as e:
            raise OracleError(f"no response within {self.config.timeout_seconds}s") from e
        except OSError as e:
            raise OracleError(f"cannot run {self.config.program}: {e}") from e

        if completed.returncode != 0:
            raise OracleError(f"{self.config.program} exited with status {completed.returncode}")

        output = completed.stdout or ""
        if not output.strip():
            raise OracleError("empty response")

        return output
