"""Services used by the paneshift CLI"""

from .layout_detection_service import LayoutDetectionService

__all__ = ["LayoutDetectionService"]
