"""
Game configuration and constants.
"""

# Resource colors, in the order used by card cost vectors
COLORS = ["black", "red", "green", "blue", "white"]
NUM_COLORS = len(COLORS)

# Point value marking a tier-3 (Koh-i-noor) card
TIER3_VALUE = 10

# Deck capacities
TABLE_SLOTS = 4
MAX_BACKLOG = 30
MAX_SEQUENCE_LENGTH = 40
MAX_CARD_COST = 10

# Game mechanics
MAX_COLOR_DEFICIT = 4    # tokens of one color you can hold for a single purchase
TOKEN_SUPPLY_CAP = 12    # total tokens spent on a single purchase
TOKENS_PER_ROUND = 4
ROUND_BUDGET = 28
WIN_THRESHOLD = 31

# Annealing schedule
START_TEMPERATURE = 2.0
FINAL_TEMPERATURE = 0.1
ANNEAL_STEPS = 200_000
RUNS_PER_COMPLETION = 10
GENERATED_TOKENS = 10     # mutations draw tokens in [0, 10): tiers 1 and 2 only
MAX_INSERT_LENGTH = 30    # INSERT only applies while length <= this
MUTATION_RETRY_LIMIT = 1000

# Monte Carlo driver
MONTE_CARLO_TRIALS = 50
BACKLOG_FILL_TARGET = 25
SETUP_SEED = 23590421
SEARCH_SEED = 549120939

# Solvability of a uniformly random board, in percent
RANDOM_BOARD_SOLVABILITY = 3.7

# Colors for plotting
COLOR_MAP = {
    "black": "#333333",
    "red": "#e41a1c",
    "green": "#4daf4a",
    "blue": "#377eb8",
    "white": "#bbbbbb",
}
