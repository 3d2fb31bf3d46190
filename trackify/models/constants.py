"""Domain constants.

Categories are an open set: these are the labels the entry form offers, but
any string is accepted as a grouping key.
"""

from typing import List

CATEGORIES: List[str] = [
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Other",
]
