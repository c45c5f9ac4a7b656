"""Core domain types: slots, roles, players and results."""
