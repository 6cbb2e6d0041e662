"""Single-window task list: search, category filter, completion toggle."""

__version__ = "0.1.0"
