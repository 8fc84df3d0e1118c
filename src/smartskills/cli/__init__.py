"""Command-line interface for SmartSkills."""
