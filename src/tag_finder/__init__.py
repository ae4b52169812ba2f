"""Unused CSS class detection and word search."""
