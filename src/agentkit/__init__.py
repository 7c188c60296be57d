"""Agent Starter Kit installer."""

__version__ = "1.0.0"
