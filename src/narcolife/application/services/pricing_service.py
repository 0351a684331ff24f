from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Mapping

from narcolife.application.services.balance_tables import (
    estimated_item_value,
    price_fluctuation,
    round_half_up,
)
from narcolife.domain.catalog import Catalog
from narcolife.domain.errors import IneligibleAction, NotFound, PreconditionFailed
from narcolife.domain.models.character import Character
from narcolife.domain.models.npc import NpcDefinition
from narcolife.domain.services.character_rules import add_item, remove_item


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceQuote:
    item_id: str
    buy_price: int
    sell_price: int
    fluctuation: float


@dataclass(frozen=True)
class NpcQuote:
    npc_id: str
    location: str
    prices: Mapping[str, PriceQuote] = field(default_factory=dict)
    # Arrival counter of the character the quote was drawn for.
    visit: int = 0

    def price_for(self, item_id: str) -> PriceQuote:
        quote = self.prices.get(item_id)
        if quote is None:
            raise NotFound("price quote", item_id)
        return quote


@dataclass(frozen=True)
class TradeOutcome:
    character: Character
    item_id: str
    quantity: int
    total_price: int


def quote_npc(npc: NpcDefinition, catalog: Catalog, rng: random.Random) -> NpcQuote:
    prices: dict[str, PriceQuote] = {}
    for item_id in npc.inventory:
        item = catalog.find_item(item_id)
        if item is None:
            logger.debug("Skipping unknown item %s in %s stock", item_id, npc.id)
            continue
        fluctuation = price_fluctuation(rng.random())
        prices[item_id] = PriceQuote(
            item_id=item_id,
            buy_price=round_half_up(item.base_price * npc.sell_multiplier * fluctuation),
            sell_price=round_half_up(item.base_price * npc.buy_multiplier * fluctuation),
            fluctuation=fluctuation,
        )
    return NpcQuote(npc_id=npc.id, location=npc.location, prices=prices)


def _require_current(character: Character, quote: NpcQuote) -> None:
    if quote.location != character.location:
        raise IneligibleAction("Those prices are from another city. Select the contact again.")


def buy_item(character: Character, quote: NpcQuote, item_id: str, quantity: int = 1) -> TradeOutcome:
    _require_current(character, quote)
    if int(quantity) < 1:
        raise IneligibleAction("Quantity must be at least 1.")
    price = quote.price_for(item_id)
    total = price.buy_price * int(quantity)
    if character.cash < total:
        raise PreconditionFailed("Not enough cash for this purchase", reason="insufficient_cash")

    paid = replace(character, cash=character.cash - total)
    return TradeOutcome(
        character=add_item(paid, item_id, int(quantity)),
        item_id=item_id,
        quantity=int(quantity),
        total_price=total,
    )


def sell_item(character: Character, quote: NpcQuote, item_id: str, quantity: int = 1) -> TradeOutcome:
    _require_current(character, quote)
    if item_id not in quote.prices:
        raise IneligibleAction("This contact is not buying that item.")
    if int(quantity) < 1:
        raise IneligibleAction("Quantity must be at least 1.")
    if character.quantity_of(item_id) < int(quantity):
        raise PreconditionFailed("Not enough items to sell", reason="insufficient_quantity")

    total = quote.price_for(item_id).sell_price * int(quantity)
    remaining = remove_item(character, item_id, int(quantity))
    return TradeOutcome(
        character=replace(remaining, cash=remaining.cash + total),
        item_id=item_id,
        quantity=int(quantity),
        total_price=total,
    )


def max_affordable_quantity(character: Character, quote: NpcQuote, item_id: str) -> int:
    price = quote.price_for(item_id).buy_price
    if price <= 0:
        return 0
    return character.cash // price


def estimate_inventory_value(character: Character, catalog: Catalog) -> int:
    total = 0
    for entry in character.inventory:
        item = catalog.find_item(entry.item_id)
        total += estimated_item_value(item.category if item is not None else None) * entry.quantity
    return total


class PricingService:
    def __init__(self, catalog: Catalog, rng: random.Random | None = None, rng_factory=None) -> None:
        self.catalog = catalog
        self._rng = rng or random.Random()
        self._rng_factory = rng_factory

    def quote(self, npc: NpcDefinition) -> NpcQuote:
        rng = self._rng
        if self._rng_factory is not None:
            rng = self._rng_factory.next_rng("npc_quote", {"npc_id": npc.id})
        return quote_npc(npc, self.catalog, rng)
