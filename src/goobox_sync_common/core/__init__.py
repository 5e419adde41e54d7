"""Core helpers shared by the Goobox sync client."""
