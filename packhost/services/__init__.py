"""Host services."""
