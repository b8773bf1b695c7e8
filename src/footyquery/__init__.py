"""
FootyQuery: historical football match queries, matchup statistics and a
head-to-head outcome heuristic.
"""

__version__ = "0.1.0"
