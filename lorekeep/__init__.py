"""
Lorekeep - token-authenticated character service.
"""

__version__ = "0.1.0"
