"""Core engine: hashing, matching, lock file persistence and installation."""
