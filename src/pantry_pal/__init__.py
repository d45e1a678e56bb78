"""Pantry inventory tracking with recipe suggestions."""
