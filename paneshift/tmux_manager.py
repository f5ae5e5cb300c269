"""
Tmux Manager Module
Queries tmux windows and executes reconciliation plans against them
"""

import os
import subprocess
import logging
from typing import List, Optional, Union

from .exceptions import ReconcileError, TmuxError
from .layouts import create_template
from .models import LayoutTemplate, Pane, WindowSnapshot
from .reconciler import Command, LayoutReconciler

PANE_FORMAT = "#{pane_id}:#{pane_index}:#{pane_left}:#{pane_top}:#{pane_width}:#{pane_height}"
WINDOW_SIZE_FORMAT = "#{window_width} #{window_height}"


class TmuxManager:
    """Reads window state from tmux and applies layouts to it"""

    def __init__(self, target: Optional[str] = None, tmux_bin: str = "tmux",
                 reconciler: Optional[LayoutReconciler] = None, inherit_cwd: bool = True):
        self.target = target
        self.tmux_bin = tmux_bin
        self.reconciler = reconciler or LayoutReconciler()
        self.inherit_cwd = inherit_cwd
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @staticmethod
    def is_inside_tmux() -> bool:
        """Check if we are running inside a tmux client"""
        return bool(os.environ.get("TMUX"))

    def _target_args(self) -> List[str]:
        return ["-t", self.target] if self.target else []

    def _tmux(self, args: List[str], **kwargs) -> subprocess.CompletedProcess:
        return self._run_command([self.tmux_bin] + args, **kwargs)

    def get_window_snapshot(self) -> WindowSnapshot:
        """Query the window size and its panes in index order

        Raises:
            subprocess.CalledProcessError: If tmux fails
            TmuxError: If tmux output cannot be parsed
        """
        size = self._tmux(["display-message", "-p"] + self._target_args() + [WINDOW_SIZE_FORMAT],
                          capture_output=True, text=True)
        try:
            width, height = (int(part) for part in size.stdout.split())
        except ValueError:
            raise TmuxError(f"Unexpected window size output: {size.stdout.strip()!r}") from None

        result = self._tmux(["list-panes"] + self._target_args() + ["-F", PANE_FORMAT],
                            capture_output=True, text=True)
        panes = []
        indices = []
        for line in result.stdout.strip().split('\n'):
            if not line:
                continue
            parts = line.split(':')
            if len(parts) < 6:
                raise TmuxError(f"Unexpected list-panes output: {line!r}")
            try:
                pane_id = parts[0]
                index, left, top, pane_width, pane_height = (int(p) for p in parts[1:6])
            except ValueError:
                raise TmuxError(f"Unexpected list-panes output: {line!r}") from None
            panes.append(Pane(id=pane_id, x=left, y=top, width=pane_width, height=pane_height))
            indices.append(index)

        # list-panes already reports index order; sort anyway so positions match indices
        order = sorted(range(len(panes)), key=lambda i: indices[i])
        return WindowSnapshot(
            width=width,
            height=height,
            panes=tuple(panes[i] for i in order),
            pane_indices=tuple(indices[i] for i in order),
        )

    def get_current_path(self) -> Optional[str]:
        """Working directory of the active pane, or None if unavailable"""
        try:
            result = self._tmux(["display-message", "-p"] + self._target_args() + ["#{pane_current_path}"],
                                capture_output=True, text=True)
        except subprocess.CalledProcessError:
            return None
        return result.stdout.strip() or None

    def execute(self, command: Command, snapshot: Optional[WindowSnapshot] = None) -> None:
        """Run one plan command

        Args:
            command: Command from a reconciliation plan
            snapshot: Window state the command was planned against; maps swap
                positions to tmux pane indices
        """
        pane_indices = snapshot.pane_indices if snapshot else ()
        args = command.to_tmux_args(self.target, pane_indices)
        self.logger.debug(f"Executing plan command: {command}")
        self._tmux(args, capture_output=True, text=True)

    def apply_template(self, layout: Union[str, LayoutTemplate]) -> bool:
        """Rearrange the window into a layout, keeping matched panes alive

        Returns:
            True if every tmux command succeeded
        """
        template = create_template(layout)
        try:
            snapshot = self.get_window_snapshot()
            # Both phases must plan cleanly before the window is touched
            self.reconciler.plan(snapshot, template)
            if self.inherit_cwd:
                self.reconciler.start_directory = self.get_current_path()

            adjustment = self.reconciler.plan_adjustments(snapshot, template)
            for command in adjustment.commands:
                self.execute(command, snapshot)

            # New pane ids and indices are only known after the splits
            adjusted = self.get_window_snapshot() if adjustment.commands else snapshot
            arrangement = self.reconciler.plan_arrangement(adjusted, template, adjustment)
            for command in arrangement.commands:
                self.execute(command, adjusted)

        except subprocess.CalledProcessError as e:
            self.logger.error(f"Failed to apply layout '{template.name}': {e}")
            if getattr(e, 'stderr', None):
                self.logger.error(f"stderr: {e.stderr.strip()}")
            return False
        except (TmuxError, ReconcileError, ValueError) as e:
            self.logger.error(f"Failed to apply layout '{template.name}': {e}")
            return False

        self.logger.info(
            f"Applied layout '{template.name}': kept {len(adjustment.match.matches)} panes, "
            f"created {adjustment.creates}, killed {len(adjustment.destroys)}, "
            f"{len(arrangement.swaps)} swaps"
        )
        return True

    def _run_command(self, cmd: List[str], check: bool = True,
                     capture_output: bool = False, text: bool = False) -> subprocess.CompletedProcess:
        """Run command with error handling"""
        self.logger.debug(f"Executing command: {' '.join(cmd)}")
        result = subprocess.run(cmd, check=check, capture_output=capture_output, text=text)
        if result.returncode != 0 and capture_output:
            self.logger.debug(f"Command failed with stdout: {result.stdout}")
            self.logger.debug(f"Command failed with stderr: {result.stderr}")
        return result
