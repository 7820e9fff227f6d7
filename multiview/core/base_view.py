from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

import plotly.graph_objs as go

from .dataset import Dataset
from .element import Element
from .events import EventEmitter, Handler
from .object_state import ObjectState

logger = logging.getLogger(__name__)

FLASH = "flash"
VIEW_SHOW = "view:show"
VIEW_HIDE = "view:hide"


class BaseView(ABC):
    """
    Abstract base class for all sub-views.

    Defines the contract that every view managed by a MultiView follows
    - expose an 'id' and a 'label' (routing key / switcher text)
    - own an 'element' the coordinator attaches, shows and hides
    - optionally own a 'state' ObjectState (None for stateless views)
    - emit 'flash' events with a notification-shaped dict
    - receive 'view:show' / 'view:hide' lifecycle signals
    - implement 'compute_data' and 'render_figure'
    """

    id: str = None
    label: str = None
    # None means the view keeps no state of its own
    default_state: Optional[Dict[str, Any]] = None

    def __init__(self, dataset: Dataset, state: Optional[Mapping[str, Any]] = None):
        self.dataset = dataset
        self.events = EventEmitter()
        self.element = Element("div", classes={f"view-{self.id}"})
        self.active = False

        self.state: Optional[ObjectState] = None
        if self.default_state is not None:
            data = copy.deepcopy(self.default_state)
            if isinstance(state, Mapping):
                data.update(state)
            elif state is not None:
                logger.warning(
                    "Ignoring non-object view state",
                    extra={"view_id": self.id, "type": type(state).__name__},
                )
            self.state = ObjectState(data)

        self.bind(VIEW_SHOW, self._on_show)
        self.bind(VIEW_HIDE, self._on_hide)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def bind(self, event: str, handler: Handler) -> Handler:
        return self.events.bind(event, handler)

    def unbind(self, event: str, handler: Optional[Handler] = None) -> bool:
        return self.events.unbind(event, handler)

    def trigger(self, event: str, *args: Any) -> None:
        self.events.trigger(event, *args)

    def flash(
        self,
        message: str,
        category: str = "warning",
        persist: bool = False,
        loader: bool = False,
    ) -> None:
        self.trigger(FLASH, {"message": message, "category": category, "persist": persist, "loader": loader})

    def _on_show(self) -> None:
        self.active = True

    def _on_hide(self) -> None:
        self.active = False

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    @abstractmethod
    def compute_data(self) -> Any:
        """
        Compute the data to draw from the dataset's current page of records
        and this view's state
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: Any) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by {@link compute_data()}
        """
        raise NotImplementedError()

    def render(self) -> go.Figure:
        return self.render_figure(self.compute_data())

    def set_state(self, partial: Mapping[str, Any]) -> None:
        if self.state is None:
            raise TypeError(f"View '{self.id}' has no state")
        self.state.set(partial)

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig
