"""API specification inspection."""
