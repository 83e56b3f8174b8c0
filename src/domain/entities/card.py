"""Card catalog entities: cards, categories and per-category benefit rules."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class CardType(str, Enum):
    """Payment network of a card."""

    VISA = "visa"
    MASTERCARD = "mastercard"
    AMEX = "amex"


@dataclass(frozen=True)
class Category:
    """A spending category (Dining, Groceries, Travel, ...)."""

    id: int
    name: str
    description: str = ""
    icon: str = ""


@dataclass(frozen=True)
class BenefitRule:
    """
    Reward policy of one card for one category.

    Rates are percentages of spend. All three rates may be set, but only
    one unit is ever credited (cashback, then points, then miles).

    Attributes:
        card_id: Card the rule belongs to
        category_id: Category the rule applies to
        cashback_rate: Cashback percentage (6.0 means 6%)
        points_rate: Points earned per 100 currency units spent
        miles_rate: Miles earned per 100 currency units spent
        cap: Maximum spend eligible for reward per period (0 = uncapped)
        min_spend: Spend below this earns nothing (0 = no floor)
    """

    card_id: int
    category_id: int
    cashback_rate: float = 0.0
    points_rate: float = 0.0
    miles_rate: float = 0.0
    cap: float = 0.0
    min_spend: float = 0.0
    description: str = ""
    id: Optional[int] = None

    @property
    def is_capped(self) -> bool:
        return self.cap > 0


@dataclass(frozen=True)
class Card:
    """A credit card from the catalog together with its benefit rules."""

    id: int
    name: str
    bank: str
    annual_fee: float = 0.0
    is_active: bool = True
    card_type: CardType = CardType.VISA
    description: str = ""
    image_url: str = ""
    welcome_bonus: str = ""
    benefits: List[BenefitRule] = field(default_factory=list)

    def benefit_for(self, category_id: int) -> Optional[BenefitRule]:
        """Return the first benefit rule for a category, if the card has one."""
        for benefit in self.benefits:
            if benefit.category_id == category_id:
                return benefit
        return None
