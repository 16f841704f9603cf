"""
Shared kernel of the license shop.

Holds what every app needs: domain exceptions and events, value objects,
the clock, the in-memory store with its unit of work, the service container,
configuration, metrics and the HTTP middleware.
"""
