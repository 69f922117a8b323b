from .renderer import PageRenderer

__all__ = ["PageRenderer"]
