"""Settings package for Travel Nest.

`base.py` contains configuration shared across environments. The `dev.py`
and `prod.py` modules extend it with environment specific overrides.
"""
