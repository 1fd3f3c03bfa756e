"""
Business profile resolution.

Responsibilities:
- Derive the canonical location/name slug that addresses a profile.
- Resolve an id or a (possibly legacy) slug to exactly one business.
- Fill in the display defaults a profile page needs.
"""
