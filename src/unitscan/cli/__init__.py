"""Command line interface for unitscan."""
