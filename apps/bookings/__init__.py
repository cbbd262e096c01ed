"""Bookings app package.

This app encapsulates viewing requests: the booking request model, its
status lifecycle, form validation and the services that keep property and
employee counters in step with every status change.
"""
