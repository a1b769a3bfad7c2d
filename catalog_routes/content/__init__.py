"""Content repository boundary: validated entity types and CMS adapters."""
