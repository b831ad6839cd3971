"""Presentation layer (command line)."""
