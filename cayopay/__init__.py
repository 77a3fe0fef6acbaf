"""Domain model, storage and services for a cashless point-of-sale wallet system."""

__version__ = "0.1.0"