"""Products a user bookmarked."""
