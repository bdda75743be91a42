from enum import Enum


class Priority(str, Enum):
    LOW = "Baixa"
    MEDIUM = "Média"
    HIGH = "Alta"


# "Media" without the diacritic ranks like "Média" when sorting, but it is not
# a Priority member: input validation only checks that a label was given.
PRIORITY_RANKS = {
    Priority.HIGH.value: 3,
    Priority.MEDIUM.value: 2,
    "Media": 2,
    Priority.LOW.value: 1,
}


def priority_rank(label):
    """Sort weight for a stored priority label; unknown labels sort lowest."""
    return PRIORITY_RANKS.get(label, 0)
