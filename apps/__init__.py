"""Django apps of the Travel Nest backend."""
