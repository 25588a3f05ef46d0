"""Host API routes and middleware."""
