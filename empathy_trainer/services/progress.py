"""Progress aggregate: streak rule, running averages, level bands and display descriptors."""
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from empathy_trainer.models.progress import DEFAULT_DIFFICULTY, PROGRESS_ID, Progress

# (upper bound exclusive, level); 300+ responses is level 10
LEVEL_BANDS = [
    (5, 1),
    (15, 2),
    (30, 3),
    (50, 4),
    (75, 5),
    (100, 6),
    (150, 7),
    (200, 8),
    (300, 9),
]
MAX_LEVEL = 10

LEVEL_DESCRIPTIONS = {
    1: "Beginner - Just starting your journey",
    2: "Novice - Learning the basics",
    3: "Student - Understanding empathy",
    4: "Practitioner - Developing skills",
    5: "Skilled - Good empathy awareness",
    6: "Advanced - Strong empathy skills",
    7: "Expert - Excellent empathy response",
    8: "Master - Outstanding empathy abilities",
    9: "Guru - Exceptional empathy mastery",
    10: "Sage - Empathy wisdom achieved",
}

MOTIVATIONAL_MESSAGES = [
    (1, "Welcome! Ready to start your empathy journey?"),
    (5, "Great start! Every response makes you more empathetic."),
    (20, "You're building great habits! Keep practicing."),
    (50, "Wonderful progress! Your empathy skills are growing."),
    (100, "Impressive dedication! You're becoming truly empathetic."),
]
MOTIVATION_TOP = "You're an empathy expert! Your kindness makes a difference."

MILESTONES = [
    (3, "Respond for 3 days in a row"),
    (7, "Complete your first week"),
    (14, "Achieve a 2-week streak"),
    (30, "Reach a 1-month streak"),
    (100, "Aim for 100 days in a row"),
]
MILESTONE_TOP = "You've achieved all major milestones!"


def new_progress(today: date) -> Progress:
    """Fresh aggregate with every counter at its default."""
    progress = Progress(id=PROGRESS_ID, start_date=today)
    reset_progress(progress, today)
    return progress


def reset_progress(progress: Progress, today: date) -> None:
    progress.current_streak = 0
    progress.longest_streak = 0
    progress.total_responses = 0
    progress.last_activity_date = None
    progress.start_date = today
    progress.total_active_days = 0
    progress.average_response_length = 0.0
    progress.average_self_rating = 0.0
    progress.examples_viewed = 0
    progress.unique_scenarios_completed = 0
    progress.preferred_difficulty = DEFAULT_DIFFICULTY
    progress.tutorial_completed = False
    progress.achievements_unlocked = []


async def load_progress(db: AsyncSession, today: date) -> Progress:
    """Return the aggregate row, adding a default one to the session if it does not exist yet."""
    progress = await db.get(Progress, PROGRESS_ID)
    if progress is None:
        progress = new_progress(today)
        db.add(progress)
    return progress


# ---------- streak ----------

def next_streak(current: int, last_activity: date | None, today: date, first_today: bool) -> int:
    """Streak after a submission on `today`.

    Only the first response of a day moves the streak: a gap of more than one day
    (or no previous activity) restarts it at 1, otherwise it grows by one.
    """
    if not first_today:
        return current
    if last_activity is None or (today - last_activity).days > 1:
        return 1
    return current + 1


def should_reset_streak(progress: Progress, today: date) -> bool:
    if progress.last_activity_date is None:
        return True
    return (today - progress.last_activity_date).days > 1


def has_responded_today(progress: Progress, today: date) -> bool:
    return progress.last_activity_date == today


def apply_submission(
    progress: Progress,
    *,
    today: date,
    response_length: int,
    self_rating: int | None,
    first_today: bool,
    unique_scenarios: int,
) -> None:
    """Fold one new response into the aggregate in place."""
    old_total = progress.total_responses
    new_total = old_total + 1

    streak = next_streak(progress.current_streak, progress.last_activity_date, today, first_today)
    progress.current_streak = streak
    progress.longest_streak = max(progress.longest_streak, streak)
    progress.total_responses = new_total
    if first_today:
        progress.total_active_days += 1
    progress.last_activity_date = today

    progress.average_response_length = (
        progress.average_response_length * old_total + response_length
    ) / new_total
    if self_rating is not None:
        # Weighted by all responses, not only rated ones; the scan-based stats use the rated count.
        progress.average_self_rating = (
            progress.average_self_rating * old_total + self_rating
        ) / (old_total + 1)

    progress.unique_scenarios_completed = unique_scenarios


# ---------- derived views ----------

def days_since_start(progress, today: date) -> int:
    return (today - progress.start_date).days


def activity_percentage(progress, today: date) -> float:
    """Share of days since start with at least one response (0.0 to 1.0)."""
    total_days = days_since_start(progress, today)
    if total_days > 0:
        return progress.total_active_days / total_days
    return 0.0


def format_activity_percentage(progress, today: date) -> str:
    return f"{int(activity_percentage(progress, today) * 100)}%"


def responses_per_day(progress) -> float:
    if progress.total_active_days > 0:
        return progress.total_responses / progress.total_active_days
    return 0.0


def user_level(total_responses: int) -> int:
    for upper, level in LEVEL_BANDS:
        if total_responses < upper:
            return level
    return MAX_LEVEL


def level_description(level: int) -> str:
    return LEVEL_DESCRIPTIONS.get(level, LEVEL_DESCRIPTIONS[MAX_LEVEL])


def streak_status_description(streak: int) -> str:
    if streak == 0:
        return "Start your streak today!"
    if streak == 1:
        return "Great start! Keep it going."
    if streak < 7:
        return f"Building momentum! {streak} days strong."
    if streak < 30:
        return f"Excellent streak! {streak} days in a row."
    if streak < 100:
        return f"Amazing dedication! {streak} days straight."
    return f"Incredible! You're an empathy master with {streak} days!"


def motivational_message(total_responses: int) -> str:
    for upper, message in MOTIVATIONAL_MESSAGES:
        if total_responses < upper:
            return message
    return MOTIVATION_TOP


def next_milestone(streak: int) -> str:
    for upper, milestone in MILESTONES:
        if streak < upper:
            return milestone
    return MILESTONE_TOP
