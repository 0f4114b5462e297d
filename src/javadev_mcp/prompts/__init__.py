"""Prompt collaborators."""
