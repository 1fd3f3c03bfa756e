"""
Review content for business profiles.

Responsibilities:
- Return authoritative reviews when a business has any on hand.
- Otherwise synthesise a stable review list from fixed pools, seeded by the
  business name so every render shows the same reviews.
"""
