"""
Business record sources.

Responsibilities:
- Walk an ordered fallback chain of HTTP endpoints and static snapshot files.
- Reject sources that fail, return markup, or carry no records.
- Normalise raw records into the canonical Business model.
"""
