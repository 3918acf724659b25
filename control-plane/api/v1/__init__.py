# control-plane/api/v1/__init__.py
"""
API v1 modules
"""

from . import descriptors, objects

__all__ = ["descriptors", "objects"]
