"""
Layout Detection Service - picks a layout template for a window
"""
import logging
import shutil
from typing import Optional, Tuple

from ..catalog_loader import LayoutCatalog
from ..layouts import minimum_window_size
from ..models import LayoutTemplate


class LayoutDetectionService:
    """Service for choosing a layout that fits the terminal"""

    def __init__(self, catalog: Optional[LayoutCatalog] = None):
        self.catalog = catalog or LayoutCatalog()
        self.logger = logging.getLogger(__name__)

    def get_terminal_size(self) -> Tuple[int, int]:
        """
        Get current terminal dimensions.

        Returns:
            Tuple of (width, height)
        """
        size = shutil.get_terminal_size(fallback=(80, 24))
        return size.columns, size.lines

    def fits(self, template: LayoutTemplate, width: int, height: int) -> bool:
        """Check that every pane of the template gets at least one cell"""
        min_width, min_height = minimum_window_size(template)
        return width >= min_width and height >= min_height

    def select_layout(self, pane_count: int, width: Optional[int] = None,
                      height: Optional[int] = None) -> Optional[LayoutTemplate]:
        """
        Pick the first template for a pane count that fits the window.

        Args:
            pane_count: Number of panes wanted
            width: Window width, terminal width if None
            height: Window height, terminal height if None

        Returns:
            A template, or None if the catalog has none for this count
        """
        candidates = self.catalog.for_count(pane_count)
        if not candidates:
            self.logger.warning(f"No layouts available for {pane_count} panes")
            return None

        if width is None or height is None:
            term_width, term_height = self.get_terminal_size()
            width = term_width if width is None else width
            height = term_height if height is None else height

        for template in candidates:
            if self.fits(template, width, height):
                self.logger.debug(f"Selected '{template.name}' for {pane_count} panes in {width}x{height}")
                return template

        fallback = candidates[0]
        self.logger.warning(
            f"No {pane_count}-pane layout fits {width}x{height}, "
            f"using '{fallback.name}' anyway; panes will be very small"
        )
        return fallback
