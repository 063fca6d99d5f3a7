"""Pattern and alias data used by team-name normalization.

Algorithm tuning constants live in resultmatch/consumers/matching/constants.py.
"""

# Organizational words that differ between sources but not between teams.
# Matched as whole tokens after unidecode + lowercase, so accented forms
# ("Club Natació") are covered by their plain spelling.
# Multi-word entries are stripped before single tokens.
ORGANIZATIONAL_WORDS = {
    # Water polo / swimming clubs
    "club natacio",
    "club de natacion",
    "club natation",
    "cn",
    "cne",
    "cnd",
    "sc",
    "sv",
    # Generic clubs
    "club",
    "club deportivo",
    "club de futbol",
    "cd",
    "cf",
    "ce",
    "fc",
    "afc",
    "ac",
    "ud",
    "sd",
    "sk",
    "vk",
    "pvk",
    "ssd",
    "asd",
    "rn",
    "kk",
    "bc",
    "hc",
}

# Cross-language spellings of the same team/city, applied after unidecode.
# Key: variant (lowercase), Value: canonical form
NAME_TRANSLATIONS = {
    "munchen": "munich",
    "munchner": "munich",
    "koln": "cologne",
    "roma": "rome",
    "milano": "milan",
    "torino": "turin",
    "napoli": "naples",
    "lisboa": "lisbon",
    "sevilla": "seville",
    "wien": "vienna",
    "beograd": "belgrade",
    "crvena zvezda": "red star",
    "praha": "prague",
    "warszawa": "warsaw",
    "athina": "athens",
    "pireas": "piraeus",
    "peiraias": "piraeus",
    "olympiakos": "olympiacos",
    "spartak moskva": "spartak moscow",
    "dinamo moskva": "dynamo moscow",
}

# Double-encoded UTF-8 sequences seen in scraped pages
MOJIBAKE_PATTERNS = [
    ("Ã¼", "ü"),
    ("Ã¶", "ö"),
    ("Ã¤", "ä"),
    ("Ãœ", "Ü"),
    ("Ã–", "Ö"),
    ("Ã„", "Ä"),
    ("ÃŸ", "ß"),
    ("Ã±", "ñ"),
    ("Ã©", "é"),
    ("Ã¡", "á"),
    ("Ã­", "í"),
    ("Ã³", "ó"),
    ("Ãº", "ú"),
    ("Ã§", "ç"),
    ("Ã¨", "è"),
    ("Ãª", "ê"),
    ("Ã«", "ë"),
    ("Ã®", "î"),
    ("Ã²", "ò"),
    ("Ã ", "à"),
]
