"""
Top-level package for the multiview explorer.

This package exposes the coordination core and its adapters.
Most code should import from submodules such as:
    multiview.core
    multiview.backends
    multiview.views
    multiview.ui
"""

__all__: list[str] = []
