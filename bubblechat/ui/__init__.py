"""Textual widgets for BubbleChat."""
