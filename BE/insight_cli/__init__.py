"""
CLI entrypoints for Alpha Insight.

This package wires the terminal UX (login, symbol prompt, menu) to the
reusable analytics in `insight_core`. Nothing here should contain
provider-specific code; keep that inside insight_core.

Modules
-------
- main.py
    The executable entry-point: login loop, symbol loop, overview and
    the 11-option menu.

- terminal_ui.py
    All input/output routines for the terminal: prompts, menu,
    pretty printing of the overview, tables and narratives.

Conventions
-----------
- terminal_ui.py is pure UI: it gathers input and prints the report
  objects it is given. It does not call network APIs.
- `main.py` is the only module that orchestrates fetching, analysis,
  authentication and narrative calls.
- API keys are read by `insight_core.config`; `.env` is loaded at startup.

Run
---
`python -m insight_cli.main` or the `alpha-insight` console script.
"""
__all__ = ["main", "terminal_ui"]
