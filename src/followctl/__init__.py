"""followctl — directed follow graph with transactionally consistent counters."""

__version__ = "0.1.0"
