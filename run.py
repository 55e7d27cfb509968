#!/usr/bin/env python3
"""
Wrapper to run the demo from a source checkout without installing.
Usage: python run.py [--headless] [--duration 10] ...
"""
import sys
import os

# Add src to path FIRST
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

if __name__ == "__main__":
    from pathtracker.main import main

    sys.exit(main(sys.argv[1:]))
