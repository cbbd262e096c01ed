"""Properties app package.

This app encapsulates property listings: the property model, amenities,
fee calculation, the database-backed list filters and the in-memory
search pipeline.
"""
