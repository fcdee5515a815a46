"""User-facing surfaces for the intake workflow."""
