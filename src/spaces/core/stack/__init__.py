"""Stacked-workspace dependency graph."""
