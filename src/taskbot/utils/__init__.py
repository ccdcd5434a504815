"""Utility helpers for Taskbot."""
