"""Pure domain package for wildfireExplorer.

This package contains the chart data model and simulation state. It operates
on in-memory inputs only and must not import Django.
"""

from .chart_data import ChartDataModel, ChartSnapshot

__all__ = ["ChartDataModel", "ChartSnapshot"]
