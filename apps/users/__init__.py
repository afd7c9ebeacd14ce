"""Users app package.

Custom user model with email login and a single role axis
(``admin`` or ``client``), JWT authentication endpoints and per-request
identity resolution used by the booking core.
"""
