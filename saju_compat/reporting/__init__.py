"""CLI-facing report rendering.

Modules
-------
formatters : ASCII formatters for breakdowns, traces, rankings, hidden-stem
             tables and relation lists.
"""
