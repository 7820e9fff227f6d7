from .grid_view import GridView
from .graph_view import GraphView
from .map_view import MapView
from .timeline_view import TimelineView

__all__ = ["GridView", "GraphView", "MapView", "TimelineView"]
