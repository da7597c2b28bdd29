"""Utility helpers for tree2md."""
