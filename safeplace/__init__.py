"""
SafePlace: directional weather risk scoring and shelter selection.
"""

__version__ = "0.1.0"
