"""Result-to-question matching.

Modules:
- normalizer: team name canonicalization
- outcome: score -> outcome and goal buckets
- engine: one-to-one assignment of results to question slots
"""
