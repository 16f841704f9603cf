"""
Orders module - Order lifecycle and simulated payments.

This module handles:
- Order entity and its state machine (PENDING -> PAID | CANCELLED)
- Payment confirmation, which issues the license
- Payment records (append-only audit)
- Order lookup by id or buyer email
"""
