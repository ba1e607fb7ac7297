"""Market data core for the StockVision dashboard."""

__version__ = "0.1.0"
