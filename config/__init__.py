"""Django configuration for the Travel Nest backend.

Contains settings modules for different environments and the WSGI and ASGI
entry points.
"""
