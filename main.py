#!/usr/bin/env python3
"""
Main entry point for the antieffort IRC bot
"""

import sys

from ircbot.cli import run

if __name__ == "__main__":
    sys.exit(run())
