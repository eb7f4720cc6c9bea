# src/idea_catalog/scripts/seed.py
"""
Populate a development database with sample users and ideas.

Creates the tables if needed, inserts five free-tier ideas, the teaser item
and a handful of premium ideas, then marks the teaser by its title marker.
Running it twice does not duplicate rows.
"""

from __future__ import annotations

import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from idea_catalog.core.logging import configure_logging
from idea_catalog.core.settings import settings
from idea_catalog.db.session import SessionLocal, create_tables
from idea_catalog.models import Category, Difficulty, Idea, User

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    {"email": "ada@example.com", "display_name": "Ada"},
    {"email": "grace@example.com", "display_name": "Grace"},
    {"email": "quiet@example.com", "display_name": None},
]

FREE_IDEAS = [
    {
        "title": "Reading Streak Tracker",
        "description": "A tiny app that tracks daily reading minutes for a book club.",
        "category": Category.BOOK_CLUB_READING,
        "difficulty": Difficulty.BEGINNER,
        "tools": ["Claude", "Bolt"],
        "tags": ["reading", "habits"],
    },
    {
        "title": "Community Potluck Planner",
        "description": "Coordinate who brings which dish to a neighbourhood potluck.",
        "category": Category.COMMUNITY_BUILDING,
        "difficulty": Difficulty.BEGINNER,
        "tools": ["Lovable"],
        "tags": ["events", "food"],
    },
    {
        "title": "Flashcard Generator",
        "description": "Turn lecture notes into spaced-repetition flashcards.",
        "category": Category.EDUCATION_LEARNING,
        "difficulty": Difficulty.INTERMEDIATE,
        "tools": ["Claude"],
        "tags": ["study", "ai"],
    },
    {
        "title": "Daily Word Puzzle",
        "description": "A once-a-day word puzzle with shareable results.",
        "category": Category.GAMES_PUZZLES,
        "difficulty": Difficulty.BEGINNER,
        "tools": ["Bolt"],
        "tags": ["games", "words"],
    },
    {
        "title": "Subscription Audit",
        "description": "List recurring subscriptions and flag the ones you forgot about.",
        "category": Category.PRODUCTIVITY_FINANCE,
        "difficulty": Difficulty.INTERMEDIATE,
        "tools": ["Claude", "Lovable"],
        "tags": ["finance", "budgeting"],
    },
]

TEASER_IDEA = {
    "title": "BuyButton: One-Click Checkout Widget",
    "description": "Drop-in checkout button that turns any page into a store.",
    "category": Category.B2B_SAAS_TOOLS,
    "difficulty": Difficulty.ADVANCED,
    "tools": ["Claude", "Bolt", "Lovable"],
    "tags": ["payments", "saas"],
    "monetization_potential": "Transaction fee plus a monthly plan for merchants.",
    "estimated_build_time": "2-3 weeks",
    "build_guide": "1. Model products and prices.\n2. Embed the widget.\n3. Wire up payments.",
}

PREMIUM_IDEAS = [
    {
        "title": "Grant Deadline Radar",
        "description": "Aggregate research grant deadlines and notify labs in time.",
        "category": Category.THINK_TANK_RESEARCH,
        "difficulty": Difficulty.ADVANCED,
        "tools": ["Claude"],
        "tags": ["research", "alerts"],
        "monetization_potential": "Per-lab subscription.",
        "estimated_build_time": "3-4 weeks",
        "build_guide": "Scrape funder calendars, normalise, then schedule digests.",
    },
    {
        "title": "Content Calendar Copilot",
        "description": "Plan a month of posts from a handful of talking points.",
        "category": Category.MARKETING_CONTENT,
        "difficulty": Difficulty.INTERMEDIATE,
        "tools": ["Claude", "Bolt"],
        "tags": ["marketing", "ai"],
        "monetization_potential": "Freemium with team seats.",
        "estimated_build_time": "1-2 weeks",
        "build_guide": "Collect talking points, draft posts, then schedule exports.",
    },
    {
        "title": "Mindful Break Reminder",
        "description": "Gentle reminders to stretch and breathe during long work sessions.",
        "category": Category.HEALTH_WELLNESS,
        "difficulty": Difficulty.BEGINNER,
        "tools": ["Lovable"],
        "tags": ["wellness", "focus"],
        "monetization_potential": "One-time purchase.",
        "estimated_build_time": "3-5 days",
        "build_guide": "Timer, notification channel, and a short library of routines.",
    },
]


def _idea_row(data: dict[str, object], *, free_tier: bool) -> Idea:
    values = dict(data)
    values["category"] = Category(values["category"]).value
    values["difficulty"] = Difficulty(values["difficulty"]).value
    return Idea(free_tier=free_tier, **values)


def mark_teaser(db: Session, marker: str | None = None) -> int:
    """Flag the idea(s) whose title contains ``marker`` as the teaser.

    Every other idea has the flag cleared. Returns the number of ideas flagged.
    """
    marker = marker or settings.teaser_title_marker
    db.execute(
        update(Idea)
        .where(Idea.is_teaser.is_(True))
        .values(is_teaser=False)
        .execution_options(synchronize_session=False)
    )
    result = db.execute(
        update(Idea)
        .where(Idea.title.contains(marker, autoescape=True))
        .values(is_teaser=True)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    flagged = result.rowcount or 0
    if flagged != 1:
        logger.warning("Expected exactly one teaser for marker %r, flagged %d", marker, flagged)
    return flagged


def seed_catalog(db: Session) -> int:
    """Insert sample rows unless ideas already exist. Returns ideas inserted."""
    if db.query(Idea.id).first() is not None:
        logger.info("Catalog already seeded; skipping")
        return 0

    for user in SAMPLE_USERS:
        db.add(User(**user))

    ideas = [_idea_row(data, free_tier=True) for data in FREE_IDEAS]
    ideas.append(_idea_row(TEASER_IDEA, free_tier=False))
    ideas.extend(_idea_row(data, free_tier=False) for data in PREMIUM_IDEAS)
    db.add_all(ideas)
    db.commit()

    mark_teaser(db)
    return len(ideas)


if __name__ == "__main__":
    configure_logging()
    create_tables()

    db = SessionLocal()
    try:
        inserted = seed_catalog(db)
    finally:
        db.close()

    print(f"Seeded {inserted} idea(s)")
