"""
recipebox - resilient async client for TheMealDB recipe API.
"""

__version__ = "0.1.0"
