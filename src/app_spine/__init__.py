"""
app-spine — install and manage apps on a remote team platform.

- :mod:`app_spine.core` — errors, events, models, config, logging
- :mod:`app_spine.ops` — install orchestration and other operations
- :mod:`app_spine.cli` — Typer command-line interface
"""

__version__ = "0.1.0"
