"""Sequential quest chain: one active quest, rewards and plot unlocks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from greenhouse_sim.core.config import FERTILIZER_ITEM, WATER_CAN_ITEM
from greenhouse_sim.viz.logger import SimLogger


class QuestStatus(Enum):
    LOCKED = "locked"
    ACTIVE = "active"
    COMPLETED = "completed"


class RewardType(Enum):
    MONEY = "money"
    FERTILIZER = "fertilizer"


@dataclass(frozen=True)
class QuestReward:
    type: RewardType
    amount: float


@dataclass
class Quest:
    """A step in the unlock chain."""

    id: str
    description: str
    condition: Callable[["GameContext"], bool]  # noqa: F821
    reward: QuestReward
    unlocked_plot_id: Optional[str] = None
    status: QuestStatus = QuestStatus.LOCKED

    @property
    def active(self) -> bool:
        return self.status == QuestStatus.ACTIVE

    @property
    def completed(self) -> bool:
        return self.status == QuestStatus.COMPLETED


# =============================================================================
# Default quest chain
# =============================================================================

def _owns_starter_kit(ctx: "GameContext") -> bool:  # noqa: F821
    ledger = ctx.ledger
    has_seed = any(ledger.has_item(seed_id) for seed_id in ctx.catalog.seed_ids)
    return has_seed and ledger.has_item(FERTILIZER_ITEM) and ledger.has_item(WATER_CAN_ITEM)


def _has_planted(ctx: "GameContext") -> bool:  # noqa: F821
    return len(ctx.market) > 0


def _any_plant_worth_100(ctx: "GameContext") -> bool:  # noqa: F821
    return any(e.current_price >= 100 for e in ctx.market.entities)


def _earned_500(ctx: "GameContext") -> bool:  # noqa: F821
    return ctx.ledger.total_earned >= 500


def default_quests() -> list[Quest]:
    return [
        Quest(
            id="buy_first_seed",
            description="Buy your first seed, fertilizer, and a water can from the shop.",
            condition=_owns_starter_kit,
            reward=QuestReward(RewardType.MONEY, 50),
            unlocked_plot_id="plot_1",
        ),
        Quest(
            id="plant_first_seed",
            description="Plant a seed in the greenhouse.",
            condition=_has_planted,
            reward=QuestReward(RewardType.FERTILIZER, 1),
        ),
        Quest(
            id="grow_plant_value_100",
            description="Grow a plant to value $100.",
            condition=_any_plant_worth_100,
            reward=QuestReward(RewardType.MONEY, 100),
            unlocked_plot_id="plot_2",
        ),
        Quest(
            id="earn_500_total",
            description="Earn $500 total.",
            condition=_earned_500,
            reward=QuestReward(RewardType.FERTILIZER, 2),
            unlocked_plot_id="plot_3",
        ),
    ]


class QuestEngine:
    """Evaluates the active quest once per tick and advances the chain."""

    def __init__(self, ctx: "GameContext", quests: Optional[list[Quest]] = None) -> None:  # noqa: F821
        self._ctx = ctx
        self.quests: list[Quest] = quests if quests is not None else default_quests()
        for quest in self.quests:
            quest.status = QuestStatus.LOCKED
        if self.quests:
            self.quests[0].status = QuestStatus.ACTIVE

    @property
    def active_quest(self) -> Optional[Quest]:
        for quest in self.quests:
            if quest.active:
                return quest
        return None

    @property
    def completed_count(self) -> int:
        return sum(1 for q in self.quests if q.completed)

    def update(self) -> bool:
        """Evaluate the active quest. Returns True if a quest completed this tick."""
        quest = self.active_quest
        if quest is None or not quest.condition(self._ctx):
            return False
        self._complete(quest)
        return True

    def _complete(self, quest: Quest) -> None:
        ctx = self._ctx
        quest.status = QuestStatus.COMPLETED
        ctx.logger.log(SimLogger.QUEST, f"Quest completed: {quest.description}", day=ctx.clock.day, quest=quest.id)

        if quest.reward.type == RewardType.MONEY:
            ctx.ledger.add_money(quest.reward.amount)
        elif quest.reward.type == RewardType.FERTILIZER:
            ctx.ledger.add_item(FERTILIZER_ITEM, int(quest.reward.amount))

        if quest.unlocked_plot_id:
            ctx.plots.unlock_plot(quest.unlocked_plot_id)

        index = self.quests.index(quest)
        if index < len(self.quests) - 1:
            nxt = self.quests[index + 1]
            nxt.status = QuestStatus.ACTIVE
            ctx.logger.log(SimLogger.QUEST, f"New quest: {nxt.description}", day=ctx.clock.day, quest=nxt.id)

    def status_rows(self) -> list[dict]:
        """Quest list view: id, description, status, reward."""
        return [
            {
                "id": q.id,
                "description": q.description,
                "status": q.status.value,
                "reward": f"{q.reward.type.value}:{q.reward.amount:g}",
            }
            for q in self.quests
        ]
