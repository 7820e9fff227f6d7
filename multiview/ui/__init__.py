"""
Dash adapter: renders a MultiView's switcher, notifications, result count
and active view, and feeds user interaction back into it.
"""
