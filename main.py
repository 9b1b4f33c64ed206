#!/usr/bin/env python3
"""
Vercel DDNS - Main Entry Point

This is the main entry point for the Vercel DDNS updater.
It can be run directly or imported as a module.
"""

from vercel_ddns.cli.main import main

if __name__ == "__main__":
    main()
