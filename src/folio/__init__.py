"""folio: content persistence core for a personal blog and portfolio."""

__version__ = "0.1.0"
