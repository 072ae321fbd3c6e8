"""SGit - a minimal local version-control engine.

SGit stores whole-file snapshots as content-addressed objects and chains
commits into a single linear history that can be listed and diffed.
"""

__version__ = "0.1.0"
__author__ = "SGit Contributors"

__all__ = ["__version__", "__author__"]
