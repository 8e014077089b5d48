"""HTTP helpers shared by the auth and user blueprints."""
