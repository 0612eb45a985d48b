"""Template and domain configuration services."""
