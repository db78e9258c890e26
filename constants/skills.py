"""Selectable skill, goal and event-category options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Option:
    id: str
    name: str


@dataclass(frozen=True)
class SkillCategory:
    id: str
    name: str
    items: tuple[Option, ...]


def _options(*pairs: tuple[str, str]) -> tuple[Option, ...]:
    return tuple(Option(id=item_id, name=name) for item_id, name in pairs)


SKILL_CATEGORIES: Final[tuple[SkillCategory, ...]] = (
    SkillCategory(
        "popular",
        "Popular Interests",
        _options(
            ("social-networking", "Social Networking"),
            ("community", "Community"),
            ("self-improvement", "Self-Improvement"),
        ),
    ),
    SkillCategory(
        "creativity",
        "Creativity",
        _options(
            ("design", "Design"),
            ("photography", "Photography"),
            ("dancing", "Dancing"),
            ("videography", "Videography"),
            ("craft", "Craft"),
            ("writing", "Writing"),
            ("singing", "Singing"),
        ),
    ),
    SkillCategory(
        "sports",
        "Sports",
        _options(
            ("cricket", "Cricket"),
            ("football", "Football"),
            ("kabaddi", "Kabaddi"),
            ("volleyball", "Volleyball"),
            ("wrestling", "Wrestling"),
            ("chess", "Chess"),
            ("athletics", "Athletics"),
            ("basketball", "Basketball"),
            ("table-tennis", "Table Tennis"),
            ("shooting", "Shooting"),
            ("archery", "Archery"),
            ("cycling", "Cycling"),
        ),
    ),
    SkillCategory(
        "career",
        "Career & Business",
        _options(
            ("govt-jobs", "Government Jobs"),
            ("private-jobs", "Private Jobs"),
            ("freelancing", "Freelancing"),
            ("teaching", "Teaching"),
            ("healthcare", "Healthcare"),
            ("it/software", "IT / Software"),
            ("engineering", "Engineering"),
            ("marketing-sales", "Marketing & Sales"),
            ("banking-finance", "Banking & Finance"),
            ("agriculture", "Agriculture Sector"),
            ("law/legal-services", "Law / Legal Services"),
            ("design/art", "Design / Art"),
            ("food-business", "Food Business"),
            ("e-commerce", "E-commerce"),
            ("transportation", "Transportation"),
            ("logistics", "Logistics"),
        ),
    ),
    SkillCategory(
        "community-env",
        "Community & Environment",
        _options(
            ("volunteering", "Volunteering"),
            ("youth-empowerment", "Youth Empowerment"),
            ("women-rights", "Women's Rights"),
            ("education-access", "Education Access"),
            ("disaster-relief", "Disaster Relief"),
            ("support-for-seniors", "Support for Seniors"),
            ("farming", "Farming"),
            ("waste-management", "Waste Management"),
            ("tree-plantation", "Tree Plantation"),
            ("clean-energy", "Clean Energy"),
            ("animal-welfare", "Animal Welfare"),
            ("sustainable-projects", "Sustainability Projects"),
            ("water-conservation", "Water Conservation"),
            ("roommates", "Roommates"),
        ),
    ),
    SkillCategory(
        "health",
        "Health & Wellbeing",
        _options(
            ("mental-health-awareness", "Mental Health Awareness"),
            ("meditation", "Meditation"),
            ("yoga", "Yoga"),
            ("nutrition", "Nutrition"),
            ("fitness", "Fitness/Gym"),
            ("healthy-eating", "Healthy Eating"),
            ("digital-detox", "Digital Detox"),
            ("disability-support", "Disability Support"),
        ),
    ),
    SkillCategory(
        "identity",
        "Identity & Language",
        _options(
            ("student", "Student"),
            ("farmer", "Farmer"),
            ("professional", "Professional"),
            ("entrepreneur", "Entrepreneur"),
            ("artist/creator", "Artist/Creator"),
            ("homemaker", "Homemaker"),
            ("community-worker", "Community Worker"),
            ("volunteer", "Volunteer"),
            ("activist", "Activist"),
            ("english", "English"),
        ),
    ),
)

SKILL_IDS: Final[tuple[str, ...]] = tuple(item.id for category in SKILL_CATEGORIES for item in category.items)

GOALS: Final[tuple[Option, ...]] = _options(
    ("find-study-buddies", "Find Study Buddies"),
    ("collaborate-projects", "Collaborate on Projects"),
    ("join-campus-events", "Join Campus Events"),
    ("explore-internships-jobs", "Explore Internships/Jobs"),
    ("connect-mentors", "Connect with Mentors"),
)

GOAL_IDS: Final[tuple[str, ...]] = tuple(goal.id for goal in GOALS)

EVENT_CATEGORIES: Final[tuple[Option, ...]] = _options(
    ("music", "Music"),
    ("sports", "Sports"),
    ("health", "Health"),
    ("community", "Community"),
    ("tech", "Tech"),
    ("education", "Education"),
    ("art-culture", "Art & Culture"),
    ("festive", "Festive"),
    ("gaming", "Gaming"),
)

EVENT_CATEGORY_IDS: Final[tuple[str, ...]] = tuple(category.id for category in EVENT_CATEGORIES)


def skill_name(skill_id: str) -> str | None:
    """Return the display name for ``skill_id``."""

    for category in SKILL_CATEGORIES:
        for item in category.items:
            if item.id == skill_id:
                return item.name
    return None


__all__ = [
    "EVENT_CATEGORIES",
    "EVENT_CATEGORY_IDS",
    "GOALS",
    "GOAL_IDS",
    "Option",
    "SKILL_CATEGORIES",
    "SKILL_IDS",
    "SkillCategory",
    "skill_name",
]
