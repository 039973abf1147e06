"""Core conversation machinery for BubbleChat."""
