# src/idea_catalog/services/__init__.py
"""Domain services for the idea catalog."""
