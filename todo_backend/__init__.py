"""Multi-user to-do list API."""
