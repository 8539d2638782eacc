"""
remix-migrate: move Remix projects off the monolithic ``remix`` package.

Works out which runtime and server adapter a project targets from its
package.json, then routes each legacy ``remix`` import to the
``@remix-run/*`` package that now exports it.

Main features:
- Adapter and runtime inference with an interactive fallback
- First-match import routing across adapter, client and runtime packages
- Table, JSON and YAML output for the rewrite step
"""

__version__ = "0.1.0"
