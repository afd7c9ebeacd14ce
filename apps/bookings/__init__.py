"""Bookings app package.

This app encapsulates the reservation domain: availability windows are
turned into bookable intervals, proposed stays are checked for conflicts
and reservations move through their lifecycle. Creation runs as one
atomic unit holding a row lock on the product, backed by an exclusion
constraint where the database supports it.
"""
