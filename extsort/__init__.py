"""Extension Sorter: file classification and relocation by extension."""

from .version import load_version

__version__ = load_version()

__all__ = ["__version__"]
