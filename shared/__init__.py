"""
Shared kernel

Building blocks used by every app: domain base classes and errors, the
unit of work and message bus, and the HTTP-facing infrastructure.
"""
