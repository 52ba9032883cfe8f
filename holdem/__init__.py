"""
holdem: Hand evaluation and equity engine for a poker trainer

Finds the best five-card hand from any known cards, counts outs for
drawing hands and estimates showdown equity against random opponents
by Monte Carlo simulation. Quizzes, odds overlays and coaching hints
are built on top of these results.
"""

__version__ = "0.1.0"
