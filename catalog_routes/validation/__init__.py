"""Slug consistency validator and the audited repair command."""
