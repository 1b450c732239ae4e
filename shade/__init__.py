"""
Shade: signed-URL asset proxy
"""

__version__ = "0.1.0"
