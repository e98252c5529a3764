"""Services package."""

from budget_planner.services.chart import (
    ChartProjection,
    ChartRenderer,
    ChartRenderResult,
    PlotlyPieRenderer,
    project,
    render_chart,
)
from budget_planner.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
    LedgerPersistence,
    StorageConnectionError,
    StorageError,
)

__all__ = [
    # Chart
    "ChartProjection",
    "ChartRenderResult",
    "ChartRenderer",
    "PlotlyPieRenderer",
    "project",
    "render_chart",
    # Storage
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "KeyValueStorageInterface",
    "LedgerPersistence",
    "StorageConnectionError",
    "StorageError",
]
