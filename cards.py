"""
Card catalogue, card-line parsing and board input.

A card line reads: black red green blue white <color> <points>,
e.g. "0 6 0 0 0 red 3".
"""

import logging
from functools import lru_cache
from typing import FrozenSet, Iterable, Optional, Tuple

from config import COLORS, NUM_COLORS
from game_logic import add_card
from models import Card, Deck

logger = logging.getLogger(__name__)


class UnrecognizedCardError(ValueError):
    """A board card that does not exist in the catalogue.

    `card` is None when the line's fields do not even form a valid Card
    (unknown color name, cost or value out of range).
    """

    def __init__(self, description: str, card: Optional[Card] = None) -> None:
        super().__init__(f"unrecognized card {description}")
        self.description = description
        self.card = card


# Level one: value 0, except the four-of-a-color cards worth one point.
# Level two: values 1-3. Tier three: the Koh-i-noor cards, tagged with 10.
CATALOGUE_LINES = [
    # level one
    "0 1 1 1 1 black 0",
    "0 1 1 2 1 black 0",
    "0 1 0 2 2 black 0",
    "1 3 1 0 0 black 0",
    "0 1 2 0 0 black 0",
    "0 0 2 0 2 black 0",
    "0 0 3 0 0 black 0",
    "0 0 0 4 0 black 1",
    "1 1 1 0 1 blue 0",
    "1 2 1 0 1 blue 0",
    "0 2 2 0 1 blue 0",
    "0 1 3 1 0 blue 0",
    "2 0 0 0 1 blue 0",
    "2 0 2 0 0 blue 0",
    "3 0 0 0 0 blue 0",
    "0 4 0 0 0 blue 1",
    "1 1 1 1 0 white 0",
    "1 1 2 1 0 white 0",
    "1 0 2 2 0 white 0",
    "1 0 0 1 3 white 0",
    "1 2 0 0 0 white 0",
    "2 0 0 2 0 white 0",
    "0 0 0 3 0 white 0",
    "0 0 4 0 0 white 1",
    "1 1 0 1 1 green 0",
    "2 1 0 1 1 green 0",
    "2 2 0 1 0 green 0",
    "0 0 1 3 1 green 0",
    "0 0 0 1 2 green 0",
    "0 2 0 2 0 green 0",
    "0 3 0 0 0 green 0",
    "4 0 0 0 0 green 1",
    "1 0 1 1 1 red 0",
    "1 0 1 1 2 red 0",
    "2 0 1 0 2 red 0",
    "3 1 0 0 1 red 0",
    "0 0 1 2 0 red 0",
    "0 2 0 0 2 red 0",
    "0 0 0 0 3 red 0",
    "0 0 0 0 4 red 1",
    # level two
    "0 0 2 2 3 black 1",
    "2 0 3 0 3 black 1",
    "0 2 4 1 0 black 2",
    "0 3 5 0 0 black 2",
    "0 0 0 0 5 black 2",
    "6 0 0 0 0 black 3",
    "0 3 2 2 0 blue 1",
    "3 0 3 2 0 blue 1",
    "0 0 0 3 5 blue 2",
    "4 1 0 0 2 blue 2",
    "0 0 0 5 0 blue 2",
    "0 0 0 6 0 blue 3",
    "2 2 3 0 0 white 1",
    "0 3 0 3 2 white 1",
    "2 4 1 0 0 white 2",
    "3 5 0 0 0 white 2",
    "0 5 0 0 0 white 2",
    "0 0 0 0 6 white 3",
    "0 3 2 0 3 green 1",
    "2 0 0 3 2 green 1",
    "1 0 0 2 4 green 2",
    "0 0 3 5 0 green 2",
    "0 0 5 0 0 green 2",
    "0 0 6 0 0 green 3",
    "3 2 0 0 2 red 1",
    "3 2 0 3 0 red 1",
    "0 0 2 4 1 red 2",
    "5 0 0 0 3 red 2",
    "5 0 0 0 0 red 2",
    "0 6 0 0 0 red 3",
    # tier three
    "0 6 8 6 6 black 10",
    "8 6 6 0 6 blue 10",
    "6 8 6 6 0 white 10",
    "6 6 0 6 8 green 10",
    "6 0 6 8 6 red 10",
]

SAMPLE_BOARD = """\
0 2 0 2 0 green 0
0 0 3 0 0 black 0
1 0 1 1 1 red 0
0 0 0 1 2 green 0
0 6 0 0 0 red 3
6 0 0 0 0 black 3
0 2 4 1 0 black 2
3 2 0 3 0 red 1
6 0 6 8 6 red 10
6 8 6 6 0 white 10
"""


def parse_card_line(line: str) -> Optional[Card]:
    """
    Parse one card line.

    Returns None when the line does not tokenise (too few fields or a
    non-integer number). Fields that tokenise but name no possible card
    raise UnrecognizedCardError. Color names are case-sensitive.
    """
    parts = line.split()
    if len(parts) < NUM_COLORS + 2:
        return None
    try:
        cost = tuple(int(x) for x in parts[:NUM_COLORS])
        value = int(parts[NUM_COLORS + 1])
    except ValueError:
        return None

    color_name = parts[NUM_COLORS]
    if color_name not in COLORS:
        raise UnrecognizedCardError(_describe_fields(cost, color_name, value))
    try:
        return Card(cost=cost, color=COLORS.index(color_name), value=value)
    except ValueError:
        raise UnrecognizedCardError(_describe_fields(cost, color_name, value)) from None


@lru_cache(maxsize=None)
def load_catalogue() -> FrozenSet[Card]:
    """Every card in the game. Built once per process."""
    catalogue = frozenset(parse_card_line(line) for line in CATALOGUE_LINES)
    if None in catalogue:
        raise ValueError("malformed catalogue entry")
    return catalogue


def read_board(
    lines: Iterable[str],
    catalogue: Optional[FrozenSet[Card]] = None,
) -> Tuple[Deck, Deck, Deck]:
    """
    Build the three tier decks from card lines, in order.

    The first four cards of a tier are its visible table; later cards of that
    tier are known future reveals, listed in reveal order. Lines that do not
    tokenise are skipped; any other card missing from the catalogue raises
    UnrecognizedCardError.
    """
    if catalogue is None:
        catalogue = load_catalogue()

    decks = (Deck(), Deck(), Deck())
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        card = parse_card_line(line)
        if card is None:
            logger.warning("Skipping malformed card line %d: %r", lineno, line.rstrip("\n"))
            continue
        if card not in catalogue:
            raise UnrecognizedCardError(describe_card(card), card)
        add_card(decks[card.tier - 1], card)

    logger.debug(
        "Board read: tier sizes %s",
        [len(d.cards()) for d in decks],
    )
    return decks


def describe_card(card: Card) -> str:
    """Short human-readable form, e.g. 'red (3) red 6, '."""
    return _describe_fields(card.cost, card.color_name, card.value)


def _describe_fields(cost: Tuple[int, ...], color_name: str, value: int) -> str:
    parts = [f"{color_name} ({value}) "]
    for color, amount in zip(COLORS, cost):
        if amount > 0:
            parts.append(f"{color} {amount}, ")
    return "".join(parts)
