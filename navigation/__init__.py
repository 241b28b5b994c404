"""Database-backed hierarchical navigation menus."""
