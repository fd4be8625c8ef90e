"""axdiff - accessibility snapshot diffing for browser-driving agents."""

__version__ = "0.1.0"
