"""
                Torc Drink Ordering Service

Session-scoped drink order intake with a durable, concurrency-safe
popularity counter. Orders are grouped into named sessions (one per
event or shift) and stored one file per order.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
