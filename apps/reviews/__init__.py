"""Ratings of products by guests after a confirmed stay."""
