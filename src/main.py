#!/usr/bin/env python3
"""
SmartTunnel command-line entry script.
"""

from app import main

if __name__ == "__main__":
    main()
