"""dotstrap - Development environment bootstrap for Debian-based systems."""

__version__ = "1.0.0"
