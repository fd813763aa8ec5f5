"""Scholarly command-line interface."""
