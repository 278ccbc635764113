# src/sheetsync/utils/__init__.py
"""Configuration, file access and logging helpers for sheetsync."""
