"""
Licenses app.

Issues a license for every paid order, and validates or activates license
keys on devices (expiry, ban, activation slots and device binding).
"""
