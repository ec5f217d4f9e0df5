"""Example prompts - replace with your own."""
