import random
import sys
from dataclasses import replace
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from narcolife.application.services.pricing_service import (
    PricingService,
    buy_item,
    estimate_inventory_value,
    max_affordable_quantity,
    quote_npc,
    sell_item,
)
from narcolife.application.services.seed_policy import SeededRngFactory
from narcolife.domain.errors import IneligibleAction, NotFound, PreconditionFailed
from narcolife.domain.models.character import Character, InventoryEntry
from narcolife.domain.models.npc import NpcDefinition
from narcolife.infrastructure.inmemory.static_catalog import build_default_catalog


class _FixedRng:
    def __init__(self, *values: float) -> None:
        self._values = list(values) or [0.5]
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


def _character(**overrides) -> Character:
    values = dict(id="c1", account_id="acct", name="Vince", location="Los Angeles", cash=1000)
    values.update(overrides)
    return Character(**values)


class QuoteTests(unittest.TestCase):
    def setUp(self) -> None:
        self.catalog = build_default_catalog()
        self.dealer = self.catalog.get_npc("la-dealer-1")

    def test_quote_applies_multipliers_and_fluctuation(self) -> None:
        quote = quote_npc(self.dealer, self.catalog, _FixedRng(0.5))
        marijuana = quote.price_for("marijuana")
        self.assertAlmostEqual(1.05, marijuana.fluctuation)
        self.assertEqual(68, marijuana.buy_price)
        self.assertEqual(37, marijuana.sell_price)
        self.assertEqual("Los Angeles", quote.location)

    def test_quote_covers_whole_stock(self) -> None:
        quote = quote_npc(self.dealer, self.catalog, _FixedRng(0.1))
        self.assertEqual({"marijuana", "cocaine", "ecstasy"}, set(quote.prices.keys()))

    def test_prices_stay_inside_fluctuation_band(self) -> None:
        rng = random.Random(7)
        cocaine = self.catalog.get_item("cocaine")
        for _ in range(200):
            price = quote_npc(self.dealer, self.catalog, rng).price_for("cocaine")
            self.assertGreaterEqual(price.buy_price, round(cocaine.base_price * 1.3 * 0.8))
            self.assertLessEqual(price.buy_price, round(cocaine.base_price * 1.3 * 1.3))
            self.assertLess(price.sell_price, price.buy_price)

    def test_unknown_stock_is_skipped(self) -> None:
        npc = NpcDefinition("odd", "Odd", "Miami", ("pistol", "unobtainium"), buy_multiplier=0.5, sell_multiplier=1.5)
        quote = quote_npc(npc, self.catalog, _FixedRng(0.5))
        self.assertEqual(["pistol"], list(quote.prices.keys()))
        with self.assertRaises(NotFound):
            quote.price_for("unobtainium")

    def test_seeded_factory_replays_quotes(self) -> None:
        first = PricingService(self.catalog, rng_factory=SeededRngFactory(99)).quote(self.dealer)
        second = PricingService(self.catalog, rng_factory=SeededRngFactory(99)).quote(self.dealer)
        self.assertEqual(first, second)


class TradeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.catalog = build_default_catalog()
        self.quote = quote_npc(self.catalog.get_npc("la-dealer-1"), self.catalog, _FixedRng(0.5))

    def test_buy_debits_cash_and_adds_items(self) -> None:
        outcome = buy_item(_character(), self.quote, "marijuana", 3)
        self.assertEqual(204, outcome.total_price)
        self.assertEqual(1000 - 204, outcome.character.cash)
        self.assertEqual(3, outcome.character.quantity_of("marijuana"))

    def test_buy_beyond_cash_is_rejected(self) -> None:
        with self.assertRaises(PreconditionFailed) as ctx:
            buy_item(_character(cash=100), self.quote, "marijuana", 2)
        self.assertEqual("insufficient_cash", ctx.exception.reason)

    def test_buy_item_not_stocked_is_not_found(self) -> None:
        with self.assertRaises(NotFound):
            buy_item(_character(), self.quote, "rifle", 1)

    def test_sell_credits_cash_and_removes_items(self) -> None:
        character = _character(inventory=(InventoryEntry("marijuana", 4),))
        outcome = sell_item(character, self.quote, "marijuana", 4)
        self.assertEqual(148, outcome.total_price)
        self.assertEqual(1148, outcome.character.cash)
        self.assertEqual(0, outcome.character.quantity_of("marijuana"))

    def test_sell_more_than_held_is_rejected(self) -> None:
        character = _character(inventory=(InventoryEntry("marijuana", 1),))
        with self.assertRaises(PreconditionFailed):
            sell_item(character, self.quote, "marijuana", 2)

    def test_npc_refuses_items_outside_its_stock(self) -> None:
        character = _character(inventory=(InventoryEntry("pistol", 1),))
        with self.assertRaises(IneligibleAction):
            sell_item(character, self.quote, "pistol", 1)

    def test_zero_quantity_is_rejected(self) -> None:
        with self.assertRaises(IneligibleAction):
            buy_item(_character(), self.quote, "marijuana", 0)

    def test_quote_from_another_city_is_rejected(self) -> None:
        with self.assertRaises(IneligibleAction):
            buy_item(_character(location="Miami"), self.quote, "marijuana", 1)

    def test_buy_then_sell_on_same_quote_never_gains_cash(self) -> None:
        start = _character()
        for item_id in self.quote.prices:
            bought = buy_item(start, self.quote, item_id, 1).character
            sold = sell_item(bought, self.quote, item_id, 1).character
            self.assertLessEqual(sold.cash, start.cash)

    def test_max_affordable_quantity(self) -> None:
        self.assertEqual(14, max_affordable_quantity(_character(cash=1000), self.quote, "marijuana"))
        self.assertEqual(0, max_affordable_quantity(_character(cash=10), self.quote, "marijuana"))


class InventoryValueTests(unittest.TestCase):
    def test_estimate_uses_category_values(self) -> None:
        catalog = build_default_catalog()
        character = _character(
            inventory=(
                InventoryEntry("cocaine", 2),
                InventoryEntry("pistol", 1),
                InventoryEntry("lockpicks", 1),
                InventoryEntry("health-kit", 3),
            )
        )
        self.assertEqual(2 * 100 + 500 + 300 + 3 * 50, estimate_inventory_value(character, catalog))

    def test_unknown_items_use_fallback_value(self) -> None:
        character = replace(_character(), inventory=(InventoryEntry("mystery-box", 2),))
        self.assertEqual(50, estimate_inventory_value(character, build_default_catalog()))


if __name__ == "__main__":
    unittest.main()
