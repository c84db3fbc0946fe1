"""Display strings for opaque keys (scenario prompts, examples, categories, achievements)."""
from typing import Protocol

DEFAULT_LOCALE = "en"


class Resolver(Protocol):
    def resolve(self, key: str, locale: str = DEFAULT_LOCALE) -> str: ...


STRINGS_EN = {
    # scenarios
    "scenario_work_missed_promotion": "Your coworker just found out they were passed over for a promotion they worked toward for two years.",
    "example_work_missed_promotion": "That sounds really disappointing, especially after everything you put in. Do you want to talk about it?",
    "scenario_work_overloaded_colleague": "A colleague sighs and says they have three deadlines this week and no idea how to meet them.",
    "example_work_overloaded_colleague": "That's a lot on your plate. It makes sense you feel stretched. Is there anything I can take off your hands?",
    "scenario_work_layoff_news": "A friend tells you their whole team was laid off this morning.",
    "example_work_layoff_news": "I'm so sorry. That must be a shock. How are you holding up right now?",
    "scenario_relationships_forgotten_anniversary": "Your partner is quiet at dinner. Later they mention you forgot your anniversary.",
    "example_relationships_forgotten_anniversary": "You're right, and I can see it hurt you. The day matters to me too, and I'm sorry I let it slip.",
    "scenario_relationships_long_distance": "Your partner, living in another city, says the distance is getting harder every week.",
    "example_relationships_long_distance": "I miss you too. It sounds lonely on your end. What would help you feel closer this week?",
    "scenario_relationships_breakup": "A friend calls you in tears after their long-term relationship ended.",
    "example_relationships_breakup": "I'm here. You don't have to have it figured out. Tell me whatever you need to.",
    "scenario_family_parent_illness": "Your cousin tells you their father has been admitted to hospital with a serious illness.",
    "example_family_parent_illness": "That must be frightening. How are you coping with all of this?",
    "scenario_family_sibling_rivalry": "Your younger sibling complains that your parents always compare them to you.",
    "example_family_sibling_rivalry": "That sounds really frustrating. You deserve to be seen for who you are.",
    "scenario_family_child_struggling": "Your child comes home upset because nobody sat with them at lunch.",
    "example_family_child_struggling": "That sounds lonely. I'm glad you told me. Do you want to tell me what happened?",
    "scenario_personal_failed_exam": "A classmate failed the exam they studied all month for.",
    "example_personal_failed_exam": "That's really discouraging after all that work. It doesn't erase how hard you tried.",
    "scenario_personal_moving_city": "A friend just moved to a new city and says they don't know anyone yet.",
    "example_personal_moving_city": "Starting over is hard. It's normal to feel a bit lost at first. Want to call this weekend?",
    "scenario_personal_lost_pet": "Your neighbour's dog of twelve years passed away yesterday.",
    "example_personal_lost_pet": "I'm so sorry. Twelve years is a whole chapter of your life. She was lucky to have you.",
    "scenario_health_chronic_pain": "A coworker with chronic pain says people think they are exaggerating.",
    "example_health_chronic_pain": "That must be exhausting, dealing with the pain and with not being believed.",
    "scenario_health_new_diagnosis": "A close friend shares that they were diagnosed with a serious condition.",
    "example_health_new_diagnosis": "Thank you for trusting me with this. However you're feeling about it is okay. I'm with you.",
    "scenario_health_burnout": "Your friend says they feel empty and can't remember the last time they rested.",
    "example_health_burnout": "It sounds like you've been running on empty for a long time. That's really hard.",
    "scenario_friendship_left_out": "A friend saw photos of a trip the rest of the group took without inviting them.",
    "example_friendship_left_out": "Ouch, that would sting for me too. It's natural to feel hurt.",
    "scenario_friendship_cancelled_plans": "A friend cancels plans with you for the third time and apologizes.",
    "example_friendship_cancelled_plans": "It sounds like a lot is going on for you. Is everything okay?",
    "scenario_friendship_betrayed_secret": "A friend learns that someone they trusted shared their secret.",
    "example_friendship_betrayed_secret": "That's a real betrayal. It makes sense you feel angry and hurt.",
    "scenario_education_rejected_application": "Your roommate was rejected from their dream university.",
    "example_education_rejected_application": "I know how much you wanted this. It's okay to be disappointed.",
    "scenario_education_group_project": "A classmate says they are doing all the work in their group project.",
    "example_education_group_project": "That sounds unfair and tiring. Carrying everyone is a lot.",
    "scenario_education_dropping_out": "A student tells you they are thinking about dropping out because they feel they don't belong.",
    "example_education_dropping_out": "Feeling like you don't belong is painful. What has been making you feel that way?",
    "scenario_general_stranger_upset": "A stranger at the bus stop is visibly upset after a phone call.",
    "example_general_stranger_upset": "Sorry to intrude, you seem upset. Is there anything I can do?",
    "scenario_general_bad_day": "Someone at the checkout says it has been the worst day.",
    "example_general_bad_day": "I'm sorry to hear that. I hope the rest of it gets easier for you.",
    "scenario_general_grief_anniversary": "A friend mentions that today is the anniversary of their mother's death.",
    "example_general_grief_anniversary": "Thank you for telling me. Would you like to share something about her?",
    # categories
    "category_work": "Work",
    "category_relationships": "Relationships",
    "category_family": "Family",
    "category_personal": "Personal",
    "category_health": "Health",
    "category_friendship": "Friendship",
    "category_education": "Education",
    "category_general": "General",
    # achievements
    "achievement_first_response": "First Steps - Completed your first empathy response",
    "achievement_three_day_streak": "Building Habits - 3 days in a row",
    "achievement_week_streak": "Weekly Warrior - 7 days straight",
    "achievement_two_week_streak": "Consistent Learner - 14 days in a row",
    "achievement_month_streak": "Monthly Master - 30 days straight",
    "achievement_fifty_responses": "Half Century - 50 total responses",
    "achievement_hundred_responses": "Century Club - 100 total responses",
    "achievement_scenario_variety": "Explorer - Completed 20+ different scenarios",
    "achievement_example_learner": "Student - Viewed 25+ example responses",
    "achievement_self_reflector": "Thoughtful - Provided 50+ self ratings",
    "achievement_consistent_user": "Dedicated - 80%+ activity rate",
    "achievement_empathy_master": "Master - All achievements unlocked",
}


class CatalogResolver:
    """Table-backed resolver. Unknown locales fall back to English, unknown keys to the key itself."""

    def __init__(self, tables: dict[str, dict[str, str]] | None = None):
        self.tables = tables or {DEFAULT_LOCALE: STRINGS_EN}

    def resolve(self, key: str, locale: str = DEFAULT_LOCALE) -> str:
        table = self.tables.get(locale) or self.tables.get(DEFAULT_LOCALE, {})
        return table.get(key, key)

    def category_name(self, category: str, locale: str = DEFAULT_LOCALE) -> str:
        key = f"category_{category.lower()}"
        text = self.resolve(key, locale)
        return category.capitalize() if text == key else text

    def achievement_description(self, achievement_id: str, locale: str = DEFAULT_LOCALE) -> str:
        return self.resolve(f"achievement_{achievement_id}", locale)
