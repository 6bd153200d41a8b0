"""Core types, errors, configuration and capability interfaces."""
