"""
Draft room: turn-based snake draft engine with autodraft and
optimistic-concurrency session storage.
"""

__version__ = "1.0.0"
