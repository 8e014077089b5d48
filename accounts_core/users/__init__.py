"""User lifecycle module: registration, lookup, removal, password change."""
