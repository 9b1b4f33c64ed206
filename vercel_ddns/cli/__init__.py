"""
Command-line interface components.

This package contains CLI tools and entry points for the DDNS updater;
the console script is vercel_ddns.cli.main:main.
"""
