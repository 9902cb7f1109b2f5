"""Declarative chart specification building.

Charts are described by immutable snapshots of the chart data model and turned
into Chart.js-ready `RenderSpec` values by a pure builder. This package holds
the builder pipeline (colors, styles, axes, annotations) plus validation and
the payload codec used by the JSON views.
"""
