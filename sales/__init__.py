"""
Sales module - Aggregate sales statistics.

This module handles:
- Running all-time and daily counters
- Day rollover of the daily counters
- Read-only statistics snapshots for the admin API
"""
