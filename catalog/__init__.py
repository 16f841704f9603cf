"""
Catalog module - Product tiers and payment methods.

This module handles:
- ProductTier entity (price, duration, key prefix)
- PaymentMethod entity
- Read-only catalog lookups
"""
