"""
gamesync - gamelist.xml / file tree reconciliation for EmulationStation libraries

Loads a system's gamelist.xml into an in-memory file tree and merges the
tree's metadata back into the document without discarding entries it does
not know about.
"""

__version__ = "0.3.0"
__author__ = "jbruns"
