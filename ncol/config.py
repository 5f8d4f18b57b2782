"""
ncol Configuration
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError
from .protocol import ColumnDisplay

SOCKET_ENV = "NIRI_SOCKET"
DEBUG_ENV = "NCOL_DEBUG"


@dataclass
class ColumnsConfig:
    """Settings for one ncol run."""

    # Path of niri's IPC socket
    socket_path: str = ""

    # Display mode every rebuilt column is switched to
    column_display: ColumnDisplay = ColumnDisplay.NORMAL

    # Refuse to guess when several workspaces claim focus
    strict_focus: bool = True

    # Compute and report the plan without touching any window
    dry_run: bool = False

    # Print every published event
    debug: bool = False

    def __post_init__(self):
        """Validate the socket path and normalize the display mode."""
        if not self.socket_path:
            raise ConfigurationError(
                f"{SOCKET_ENV} environment variable not set (is niri running?)"
            )
        if isinstance(self.column_display, str):
            try:
                self.column_display = ColumnDisplay(self.column_display)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid column display: {self.column_display}. Use Normal or Tabbed"
                )

    @classmethod
    def from_env(
        cls, env: Optional[Mapping[str, str]] = None, **overrides
    ) -> "ColumnsConfig":
        """Build a config from the environment.

        Keyword overrides win over the environment; ``None`` overrides are
        ignored so unset CLI flags fall through.
        """
        if env is None:
            env = os.environ

        values = {
            "socket_path": env.get(SOCKET_ENV, ""),
            "debug": env.get(DEBUG_ENV, "") not in ("", "0"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
