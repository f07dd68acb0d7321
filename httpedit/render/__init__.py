"""Render planning and screen composition."""

from .compositor import ScreenCompositor, build_status_line, gutter_width
from .planner import RenderSnapshot, RenderTier, capture, plan_render

__all__ = [
    "RenderSnapshot",
    "RenderTier",
    "ScreenCompositor",
    "build_status_line",
    "capture",
    "gutter_width",
    "plan_render",
]
