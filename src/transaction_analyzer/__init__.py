"""Transaction analyzer - queries and aggregates over financial transaction records"""

__version__ = "0.1.0"
