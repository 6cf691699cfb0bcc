"""
Navvi - static analysis of JavaScript/TypeScript repositories.
"""

__version__ = "0.1.0"
