"""App-level APIs.

This package contains the controller functions intended to be called by the CLI.
It keeps callers decoupled from the scanning and moving internals.
"""

from . import api

__all__ = ["api"]
