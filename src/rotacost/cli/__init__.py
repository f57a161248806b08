"""Command line interface for rotacost reports."""
