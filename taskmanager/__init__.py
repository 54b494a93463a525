"""Task Manager REST API."""
