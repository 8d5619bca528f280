"""Tests for nutrient aggregation."""

from dataclasses import replace

from nutrition_insights.domain.entries import NutritionData
from nutrition_insights.domain.insights import NutrientTotals
from nutrition_insights.services.aggregation import aggregate_nutrients, entry_amount
from tests.conftest import make_entry


def test_aggregate_empty_entries() -> None:
    assert aggregate_nutrients([]) == NutrientTotals()


def test_aggregate_rounds_each_total() -> None:
    entries = [
        make_entry("Toast", calories=100.4, protein=0.1, sodium=120.3),
        make_entry("Jam", calories=200.4, protein=0.2, sodium=10.3),
    ]

    totals = aggregate_nutrients(entries)

    assert totals.calories == 301
    assert totals.protein == 0.3
    assert totals.sodium == 131


def test_aggregate_is_order_independent() -> None:
    entries = [
        make_entry(f"Food {index}", protein=0.1 * index, fat=1.115, sugar=3.333)
        for index in range(12)
    ]

    forward = aggregate_nutrients(entries)
    backward = aggregate_nutrients(list(reversed(entries)))

    assert forward == backward


def test_aggregate_treats_missing_values_as_zero() -> None:
    entry = make_entry("Mystery")
    broken = replace(
        entry,
        nutrition=NutritionData(
            calories=None,  # type: ignore[arg-type]
            protein="12.5",  # type: ignore[arg-type]
            carbs=float("nan"),
            fat=4,
        ),
    )

    totals = aggregate_nutrients([broken, make_entry("Rice", carbs=28)])

    assert totals.calories == 0
    assert totals.protein == 12.5
    assert totals.carbs == 28
    assert totals.fat == 4


def test_entry_amount_reads_single_entry() -> None:
    entry = make_entry("Soup", sodium=820)

    assert entry_amount(entry, "sodium") == 820
    assert entry_amount(entry, "missing") == 0
