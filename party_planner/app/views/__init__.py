"""Page rendering from the state store."""
