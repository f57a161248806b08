"""Roster inputs: contract models and file loaders."""
