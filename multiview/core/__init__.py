"""
Core layer: observable state, URL-fragment codec, view registry, navigation,
notifications and the MultiView coordinator
"""

from .base_view import BaseView
from .composite_state import CompositeState
from .dataset import Dataset
from .element import Element
from .hash_url import HashURLCodec, Location
from .multiview import MultiView, restore
from .navigation import NavigationController
from .notifications import Notification, NotificationCenter
from .object_state import ObjectState
from .query_state import QueryState
from .view_registry import ViewEntry, ViewRegistry

__all__ = [
    "BaseView",
    "CompositeState",
    "Dataset",
    "Element",
    "HashURLCodec",
    "Location",
    "MultiView",
    "restore",
    "NavigationController",
    "Notification",
    "NotificationCenter",
    "ObjectState",
    "QueryState",
    "ViewEntry",
    "ViewRegistry",
]
