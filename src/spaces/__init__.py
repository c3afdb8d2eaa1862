"""Manage per-branch workspaces of a repository, with optional stacking."""
