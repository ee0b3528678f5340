"""Visit tracking and links admin service."""
