"""
cmdpal - Command Palette query ranking and personalization engine
"""

__version__ = "0.3.0"
