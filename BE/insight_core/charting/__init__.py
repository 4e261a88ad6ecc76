# BE/insight_core/charting/__init__.py
"""Fixed-size terminal price charts."""

from .ascii_chart import ChartGrid, ChartRenderer, colorize_rows, render_chart

__all__ = ["ChartGrid", "ChartRenderer", "colorize_rows", "render_chart"]
