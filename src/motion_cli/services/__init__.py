"""Services module for the motion CLI - orchestration on top of the API layer."""
