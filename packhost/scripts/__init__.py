"""Operator scripts (run with ``python -m packhost.scripts.<name>``)."""
