"""Client-facing chart views."""

from .assembler import ChartAssembler, GroupedChart, PositionChart

__all__ = ["ChartAssembler", "GroupedChart", "PositionChart"]
