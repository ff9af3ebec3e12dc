"""
Version information for the Graduate Application Dashboard.

This file is the single source of truth for version numbers.
"""

__version__ = "0.3.0"
__version_info__ = (0, 3, 0)
