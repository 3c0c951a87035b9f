"""Core logic: paths, profile I/O, preflight checks, backups and the step runner."""
