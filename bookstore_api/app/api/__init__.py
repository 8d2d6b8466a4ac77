"""
API package containing the HTTP routes of the service.
"""
