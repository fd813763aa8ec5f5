"""Scholarly collector: gather Google Scholar result cards into one HTML page."""

__version__ = "0.3.0"
