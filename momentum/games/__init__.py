"""
Games module - Card catalogs.

Each game has its own subpackage with its card definitions and
deck-building helpers.
"""
