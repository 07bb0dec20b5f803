#!/usr/bin/env python3
"""
CHASE8 Launcher
================
Run this script to start the game.
"""

from chase8.main import main

if __name__ == "__main__":
    main()
