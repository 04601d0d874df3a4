"""Bundled value provider plugins."""
