"""Travel story journal API."""
