"""Motion CLI - terminal client and AI tools for the Motion task manager."""

__version__ = "0.3.0"
