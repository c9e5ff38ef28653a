"""
Centralized constants for normalization and the marina directory (Encapsulate What Changes).

Change labels, fallbacks or limits here instead of scattering literals across services and routes.
"""

# Canonical availability keys, in display order
STATUS_VACANT = "vacant"
STATUS_FEW = "few"
STATUS_FULL = "full"
STATUS_UNKNOWN = "unknown"
STATUS_KEYS = (STATUS_VACANT, STATUS_FEW, STATUS_FULL, STATUS_UNKNOWN)

STATUS_LABELS = {
    STATUS_VACANT: "空き",
    STATUS_FEW: "残りわずか",
    STATUS_FULL: "満席",
    STATUS_UNKNOWN: "不明",
}

# Group title used when nothing in the payload names the slot list
FALLBACK_GROUP_TITLE = "空き状況"

# Joins the parts of a slot note (plan name, memo fields, notes[])
NOTE_SEPARATOR = " ／ "

# Canonical range separator for time text
TIME_RANGE_SEPARATOR = "〜"

# Marina directory: used when the upstream list cannot be fetched
DEFAULT_MARINA_NAME = "勝どきマリーナ"
FALLBACK_MARINAS = [
    {
        "code": "3802",
        "name": "勝どきマリーナ",
        "nameKana": "カチドキマリーナ",
        "prefecture": "東京都",
    },
]

# Typeahead: max suggestions returned for one query
MAX_SUGGESTIONS = 12
