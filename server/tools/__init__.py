"""Example tools - replace with your own."""
