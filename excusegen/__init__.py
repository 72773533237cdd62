"""
excusegen - excuse generation service with a local catalog, ratings and favorites.
"""

__version__ = "1.0.0"
