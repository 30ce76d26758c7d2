"""Input integrations for taskstreaks."""
