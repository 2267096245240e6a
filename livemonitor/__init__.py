"""Live plotting of numeric data streamed over TCP as graphs and heatmaps."""

__version__ = "0.4.0"
__all__ = ["__version__"]