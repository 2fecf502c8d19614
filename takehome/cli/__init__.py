"""Take Home CLI package."""
