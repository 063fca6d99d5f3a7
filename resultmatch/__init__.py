"""Result-to-question matching engine.

Matches scraped match results from several sources against the fixed,
ordered questions of a prediction form and proposes answers with a
confidence score for a human to confirm.
"""

__version__ = "0.1.0"
