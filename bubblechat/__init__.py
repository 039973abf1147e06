"""BubbleChat: a terminal assistant that can run gcloud and kubectl for you."""

__version__ = "0.1.0"
