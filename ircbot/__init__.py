"""antieffort IRC bot.

A single-channel IRC client that greets joiners, laments leavers and answers
a handful of ``!bot`` commands while keeping its connection alive.
"""

__version__ = "1.0.0"
