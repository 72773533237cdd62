"""
Core excuse logic: catalog, selection, persistence, ratings and favorites.
"""
