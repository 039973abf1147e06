"""Services backing the conversation: prompts and the Gemini chat."""
