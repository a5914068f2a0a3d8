"""
Nonogram Agent: AI generated picture logic puzzles.
"""

__version__ = "1.0.0"
