"""Business logic used by the blueprints."""
