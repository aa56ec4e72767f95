"""
Store plugins.
"""
