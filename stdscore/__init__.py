"""
stdscore - standardized scores across HTML score rosters.

Each roster's best qualifying score counts as 100; a person's std score
in that roster is their raw score relative to it, and their overall
standing is the average over the rosters they appear in.
"""

__version__ = "0.1.0"
