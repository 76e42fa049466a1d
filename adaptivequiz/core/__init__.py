"""Core of the adaptive quiz engine."""
