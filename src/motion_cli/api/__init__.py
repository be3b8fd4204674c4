"""Thin async wrappers around the Motion REST API."""
