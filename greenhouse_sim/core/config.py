"""All tunable constants for the greenhouse market simulation.

Every magic number in the codebase must reference this file.
"""

import os

# =============================================================================
# TIME
# =============================================================================
SECONDS_PER_GAME_HOUR: float = 0.5   # 1 real second = 2 game hours
HOURS_PER_DAY: int = 24
STARTING_DAY: int = 1
STARTING_HOUR: int = 0
DEFAULT_FRAME_DELTA: float = 1 / 60  # seconds per rendered frame at 60 FPS

# =============================================================================
# PLOTS
# =============================================================================
PLOT_IDS: list[str] = [
    "plot_1",  # centre
    "plot_2",
    "plot_3",
    "plot_4",
    "plot_5",
    "plot_6",
    "plot_7",
    "plot_8",
    "plot_9",
]
INITIAL_MAX_PLOTS: int = 1

# =============================================================================
# MARKET (price walk, percentage points per day)
# =============================================================================
RANDOM_WALK_MAGNITUDE: float = 10.0
FERTILIZER_UNIT_BONUS: float = 5.0
WATER_UNIT_BONUS: float = 2.0
MAX_BUFF: int = 3
BASE_WATER_DECAY: float = 1.0
FERTILIZER_DECAY: float = 1.0
PRICE_HISTORY_LENGTH: int = 20
GROWTH_STAGES: int = 5            # stages 0..4
SELLABLE_GROWTH_STAGE: int = 2

# =============================================================================
# ECONOMY
# =============================================================================
STARTING_MONEY: float = 101.0
WATER_CAN_ITEM: str = "water_can"
FERTILIZER_ITEM: str = "fertilizer"
STARTING_INVENTORY: dict[str, int] = {
    "AAPL": 0,
    "TSLA": 0,
    FERTILIZER_ITEM: 0,
    WATER_CAN_ITEM: 0,
}

# Upgrade effect types
EFFECT_INCREASE_MAX_PLOTS: str = "increase_max_plots"
EFFECT_FERTILIZER_QUALITY: str = "increase_fertilizer_quality"
EFFECT_REDUCE_WATER_DECAY: str = "reduce_water_decay"
UPGRADE_EFFECT_TYPES: tuple[str, ...] = (
    EFFECT_INCREASE_MAX_PLOTS,
    EFFECT_FERTILIZER_QUALITY,
    EFFECT_REDUCE_WATER_DECAY,
)

# =============================================================================
# SHOP
# =============================================================================
FERTILIZER_PRICE: float = 10.0
WATER_CAN_PRICE: float = 20.0
WATER_CAN_MAX_OWNED: int = 1

# =============================================================================
# CATALOG FILES
# =============================================================================
DATA_DIR: str = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")
SEEDS_FILE: str = os.path.join(DATA_DIR, "seeds.json")
UPGRADES_FILE: str = os.path.join(DATA_DIR, "upgrades.json")

# =============================================================================
# QUESTS / NOTIFICATIONS
# =============================================================================
QUEST_NOTIFICATION_SECONDS: float = 5.0

# =============================================================================
# AUTOPLAYER
# =============================================================================
AUTOPLAY_CASH_RESERVE: float = 40.0        # never spend below this on upgrades
AUTOPLAY_SELL_CEILING_RATIO: float = 0.8   # sell once price covers this share of max
AUTOPLAY_FERTILIZER_STOCK: int = 2         # keep this many bags on hand

# =============================================================================
# DASHBOARD
# =============================================================================
DASHBOARD_UPDATE_INTERVAL: int = 5  # update every N simulated days
PRICE_CHART_POINTS: int = 10        # bars in the per-plant price chart
