"""
Score aggregation for stdscore.

This package turns parsed rosters into standardized scores: the per-file
aggregator finds each roster's qualifying maximum, and the roster store
combines files into per-person averages and a ranking.
"""

from .file_aggregator import build_file_result
from .roster_store import RosterStore
