"""Example resources - replace with your own."""
