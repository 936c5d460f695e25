"""Core: settings, constants, and lifespan wiring."""
