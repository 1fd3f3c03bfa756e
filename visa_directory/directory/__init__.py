"""
Directory browsing engine.

Responsibilities:
- Hold the loaded business directory in memory until it is refreshed.
- Classify businesses into keyword-driven category buckets.
- Filter and sort the directory for a visitor query.
- Reveal results in fixed-size "load more" increments.
"""
