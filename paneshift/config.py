"""
Runtime configuration for paneshift
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .models import LayoutTemplate


@dataclass
class PaneshiftConfig:
    """Settings shared by the CLI commands"""
    tmux_bin: str = "tmux"
    target: Optional[str] = None      # tmux window target, current window if None
    inherit_cwd: bool = True          # New panes start in the current pane's directory
    default_layout: Optional[str] = None
    custom_layouts: List[LayoutTemplate] = field(default_factory=list)
    config_path: Optional[Path] = None
