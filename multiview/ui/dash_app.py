"""
Dash entry point for the explorer.

One MultiView (and its dataset) is built per process and shared by every
browser session: the app serves a single shared exploration, not one per
user. Flask may run callbacks on several threads while the explorer itself
is single-threaded, so each callback holds AppContext.lock for its whole
body.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import dash_bootstrap_components as dbc
from dash import Dash

from multiview.backends.registry import default_registry
from multiview.config.loader import dataset_options, load_global_config
from multiview.config.model import GlobalConfig
from multiview.core.composite_state import view_key
from multiview.core.dataset import Dataset
from multiview.core.element import Element
from multiview.core.multiview import MultiView
from multiview.core.scheduler import PollingScheduler
from multiview.core.view_registry import ViewEntry
from multiview.ui.callbacks.callbacks_navigation import register_navigation_callbacks
from multiview.ui.callbacks.callbacks_notifications import register_notification_callbacks
from multiview.ui.callbacks.callbacks_query import register_query_callbacks
from multiview.ui.context import AppContext
from multiview.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def _build_dataset(global_config: GlobalConfig) -> Dataset:
    cfg = global_config.dataset
    backend = default_registry.create(cfg.backend, **dataset_options(cfg))
    return Dataset(
        backend=backend,
        url=cfg.url,
        name=cfg.name,
        query_state=global_config.state.get("query"),
    )


def _build_views(dataset: Dataset, global_config: GlobalConfig) -> List[ViewEntry]:
    from multiview.views import GraphView, GridView, MapView, TimelineView

    classes: Dict[str, Any] = {cls.id: cls for cls in (GridView, GraphView, MapView, TimelineView)}
    entries = []
    for view_id in global_config.views:
        cls = classes[view_id]
        view = cls(dataset, state=global_config.state.get(view_key(view_id)))
        entries.append(ViewEntry(id=view_id, label=cls.label, view=view))
    return entries


def build_context(config_root: Path | str) -> AppContext:
    global_config = load_global_config(Path(config_root))
    dataset = _build_dataset(global_config)
    scheduler = PollingScheduler()

    explorer = MultiView(
        model=dataset,
        element=Element(),
        views=_build_views(dataset, global_config),
        state=global_config.state,
        scheduler=scheduler,
        display_seconds=global_config.notification_seconds,
    )

    logger.info(
        "Explorer ready",
        extra={
            "backend": dataset.backend_type,
            "views": explorer.registry.ids(),
            "current_view": explorer.current_view,
        },
    )
    return AppContext(global_config=global_config, explorer=explorer, scheduler=scheduler)


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    ctx = build_context(config_root)

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
    )
    app.title = ctx.global_config.ui_title
    app.layout = build_layout(ctx)

    register_navigation_callbacks(app, ctx)
    register_notification_callbacks(app, ctx)
    register_query_callbacks(app, ctx)

    return app
