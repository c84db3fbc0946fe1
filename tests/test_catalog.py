"""
Tests for catalog seeding and localization lookups.
"""

import pytest

from empathy_trainer.models.scenario import CATEGORIES, MAX_DIFFICULTY, MIN_DIFFICULTY
from empathy_trainer.services.catalog import SCENARIO_DEFINITIONS, seed_scenarios
from empathy_trainer.services.localization import STRINGS_EN, CatalogResolver


def test_definitions_are_well_formed():
    keys = [d.scenario_key for d in SCENARIO_DEFINITIONS]
    assert len(keys) == len(set(keys))
    for definition in SCENARIO_DEFINITIONS:
        assert definition.category in CATEGORIES
        assert MIN_DIFFICULTY <= definition.difficulty <= MAX_DIFFICULTY
        assert definition.scenario_key in STRINGS_EN
        assert definition.example_key in STRINGS_EN


@pytest.mark.asyncio
async def test_seeding_is_idempotent(trainer, session_factory):
    await trainer.submit_response((await trainer.get_todays_challenge()).id, "Sounds rough")
    async with session_factory() as db:
        async with db.begin():
            assert await seed_scenarios(db) == 0

    scenarios = await trainer.list_scenarios()
    assert len(scenarios) == len(SCENARIO_DEFINITIONS)
    assert sum(s.usage_count for s in scenarios) == 1


@pytest.mark.asyncio
async def test_filter_by_category_and_difficulty(trainer):
    work = await trainer.list_scenarios(category="work")
    assert {s.category for s in work} == {"work"}
    easy = await trainer.list_scenarios(difficulty=1)
    assert easy and all(s.difficulty == 1 for s in easy)
    assert await trainer.get_scenario(10_000) is None


class TestResolver:
    def test_known_key(self):
        resolver = CatalogResolver()
        assert resolver.resolve("category_work") == "Work"

    def test_unknown_key_falls_back_to_key(self):
        assert CatalogResolver().resolve("scenario_missing") == "scenario_missing"

    def test_unknown_locale_falls_back_to_english(self):
        assert CatalogResolver().resolve("category_family", "ru") == "Family"

    def test_other_locale_table(self):
        resolver = CatalogResolver({"en": STRINGS_EN, "de": {"category_work": "Arbeit"}})
        assert resolver.category_name("work", "de") == "Arbeit"
        # missing from the German table: capitalized id
        assert resolver.category_name("health", "de") == "Health"

    def test_achievement_description(self):
        assert CatalogResolver().achievement_description("week_streak").startswith("Weekly Warrior")
