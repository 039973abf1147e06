"""Textual screens for BubbleChat."""
