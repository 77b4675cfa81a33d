"""Flag web-platform syntax that is not yet Baseline widely available."""

from ._version import __version__

__all__ = ["__version__"]
