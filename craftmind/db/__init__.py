"""Diary persistence."""
