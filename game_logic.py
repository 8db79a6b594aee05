"""
Core game logic: purchase costs, deck handling and move replay.
"""

from typing import List, Optional, Sequence

from config import (
    MAX_BACKLOG,
    MAX_COLOR_DEFICIT,
    MAX_SEQUENCE_LENGTH,
    NUM_COLORS,
    ROUND_BUDGET,
    TABLE_SLOTS,
    TOKEN_SUPPLY_CAP,
    TOKENS_PER_ROUND,
)
from models import Card, Deck, GameState
from twister import Twister

NUM_DECKS = 3


def card_cost(card: Card, bonus: Sequence[int]) -> Optional[int]:
    """
    Tokens needed to buy `card` given the per-color `bonus` discounts.
    Returns None when the purchase is impossible:
      - more than MAX_COLOR_DEFICIT tokens of a single color, or
      - more than TOKEN_SUPPLY_CAP tokens in total.
    """
    total = 0
    for need, have in zip(card.cost, bonus):
        deficit = need - have
        if deficit <= 0:
            continue
        if deficit > MAX_COLOR_DEFICIT:
            return None
        total += deficit
    if total > TOKEN_SUPPLY_CAP:
        return None
    return total


def add_card(deck: Deck, card: Card) -> None:
    """Deal `card` face up if a table slot is free, else append it to the backlog."""
    if len(deck.table) < TABLE_SLOTS:
        deck.table.append(card)
        return
    if len(deck.backlog) >= MAX_BACKLOG:
        raise ValueError(f"backlog holds at most {MAX_BACKLOG} cards")
    deck.backlog.append(card)


def pop_and_refill(deck: Deck, slot: int) -> Card:
    """Take the card at `slot`; the slot is refilled from the backlog tail if possible."""
    card = deck.table[slot]
    if card is None:
        raise ValueError(f"table slot {slot} is empty")
    deck.table[slot] = deck.backlog.pop() if deck.backlog else None
    return card


def _draw(pool: List[Card], twister: Twister) -> Card:
    # swap-and-pop
    idx = twister.next_bounded_int(len(pool))
    card = pool[idx]
    pool[idx], pool[-1] = pool[-1], pool[idx]
    pool.pop()
    return card


def fill_randomly(deck: Deck, target_backlog: int, pool: Sequence[Card], twister: Twister) -> None:
    """
    Complete `deck` with uniformly random cards from `pool`:
    first the free table slots, then the backlog up to `target_backlog` cards.
    """
    if target_backlog > MAX_BACKLOG:
        raise ValueError(f"backlog holds at most {MAX_BACKLOG} cards")
    remaining = list(pool)

    while len(deck.table) < TABLE_SLOTS and remaining:
        deck.table.append(_draw(remaining, twister))

    while len(deck.backlog) < target_backlog and remaining:
        deck.backlog.append(_draw(remaining, twister))


def process_move(deck: Deck, slot: int, state: GameState, bonus: List[int]) -> bool:
    """
    Try to buy the card at `slot` of `deck`, updating `state` and `bonus`.
    Returns False (and changes nothing) if the slot is empty, the card is
    unaffordable, or the purchase would not fit in the round budget.
    """
    if slot >= len(deck.table) or deck.table[slot] is None:
        return False
    card = deck.table[slot]

    cost = card_cost(card, bonus)
    if cost is None:
        return False

    # Rounds spent so far, plus this one, plus rounds to re-earn the tokens.
    recovery = -(-(state.tokens_cost + 3 + cost) // TOKENS_PER_ROUND)
    if state.rounds + 1 + recovery > ROUND_BUDGET:
        return False

    state.points += card.value
    state.tokens_cost += cost
    state.rounds += 1
    bonus[card.color] += 1
    state.cards.append(card)
    pop_and_refill(deck, slot)
    return True


def replay(moves: Sequence[int], deck1: Deck, deck2: Deck, deck3: Deck) -> GameState:
    """
    Play `moves` against copies of the three decks.

    Token m buys from deck m // 4, slot m % 4. Tokens that cannot be played
    are dropped, so the resolved state may hold fewer moves than `moves`.
    """
    if len(moves) > MAX_SEQUENCE_LENGTH:
        raise ValueError(f"move sequence holds at most {MAX_SEQUENCE_LENGTH} tokens")

    decks = [deck1.clone(), deck2.clone(), deck3.clone()]
    bonus = [0] * NUM_COLORS
    state = GameState()

    for move in moves:
        if not 0 <= move < NUM_DECKS * TABLE_SLOTS:
            continue
        deck_idx, slot = divmod(move, TABLE_SLOTS)
        if process_move(decks[deck_idx], slot, state, bonus):
            state.moves.append(move)

    return state
