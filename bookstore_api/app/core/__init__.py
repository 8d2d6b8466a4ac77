"""
Core infrastructure: configuration, logging and the store handle.
"""
