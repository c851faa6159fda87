"""Console library management: books, members, administrators and loans."""

__version__ = "0.1.0"
