"""Products app package.

Catalog of rentable products: categories, features, images, policies and
the availability windows administrators publish for each product.
"""
