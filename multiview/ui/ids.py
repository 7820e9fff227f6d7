from __future__ import annotations

__all__ = ["IDs", "view_link_id"]


class IDs:
    class Store:
        LOCATION = "url-location"
        TICK = "notification-tick"

    class Control:
        NAVIGATION = "view-navigation"
        ALERTS = "alert-messages"
        DOC_COUNT = "doc-count"
        MAIN_GRAPH = "main-graph"

        FILTERS_BTN = "menu-filters-btn"
        FACETS_BTN = "menu-facets-btn"
        FILTER_EDITOR = "filter-editor"
        FACET_VIEWER = "facet-viewer"
        FILTER_LIST = "filter-list"
        FACET_LIST = "facet-list"
        RANGE_FIELD = "range-filter-field"
        RANGE_FROM = "range-filter-from"
        RANGE_TO = "range-filter-to"
        ADD_RANGE_BTN = "add-range-filter-btn"
        FACET_FIELD = "facet-field"
        ADD_FACET_BTN = "add-facet-btn"

    class Pattern:
        # pattern-matching "type" strings
        VIEW_LINK = "view-link"
        REMOVE_FILTER = "remove-filter"
        FACET_TERM = "facet-term"


def view_link_id(view_id: str) -> dict:
    return {"type": IDs.Pattern.VIEW_LINK, "index": view_id}
