"""HR One employee portal service."""
