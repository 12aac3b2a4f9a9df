"""
Adapters - External interfaces to the engine.
"""

from soundstage.adapters.cli import main as cli_main

__all__ = ["cli_main"]
