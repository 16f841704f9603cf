"""
HTTP API for the license shop.

Thin DRF views over the application handlers; no business rules live here.
"""
