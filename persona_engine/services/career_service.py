"""
Persona Engine — Career suggestion tables.

Suggestions are keyed by the top-2 RIASEC interest traits joined with ``","``.
Lookup order:

  1. distinct-pair table, pair as given
  2. distinct-pair table, reversed pair
  3. same-type table, both orders (only matches when both traits are equal)
  4. generic fallback

Matching is exact key membership.  A miss is never an error.
"""

from __future__ import annotations

from typing import Sequence

import structlog

logger = structlog.get_logger("persona_engine.career_service")

KEY_SEPARATOR = ","

# ──────────────────────────────────────────────────────────────────────────────
# Distinct-pair table (15 = C(6, 2) entries)
# ──────────────────────────────────────────────────────────────────────────────

CAREER_PAIRS: dict[str, tuple[str, ...]] = {
    "realistic,investigative": (
        "Mechanical engineer", "Software developer", "Architect", "Technical researcher",
        "Electrical engineer", "Robotics developer", "Environmental engineer", "Aircraft mechanic",
    ),
    "realistic,artistic": (
        "Interior designer", "Craft artist", "Game designer", "Video creator",
        "Floral designer", "Furniture maker", "Stage designer", "Landscape designer",
    ),
    "realistic,social": (
        "Physical therapist", "Nurse", "Athletic trainer", "Firefighter",
        "Paramedic", "Occupational therapist", "Care worker", "Veterinary nurse",
    ),
    "realistic,enterprising": (
        "Construction manager", "Farm owner", "Manufacturing manager", "Pilot",
        "Property developer", "Car dealer", "Construction company owner", "Logistics manager",
    ),
    "realistic,conventional": (
        "Quality control specialist", "Surveyor", "Machine maintenance technician", "Systems administrator",
        "Drafting technician", "Inspection technician", "Facilities manager", "Production planner",
    ),
    "investigative,artistic": (
        "UX designer", "Science writer", "Researcher", "Data visualisation specialist",
        "Architectural designer", "Sound engineer", "Technical writer", "Museum curator",
    ),
    "investigative,social": (
        "Clinical psychologist", "Physician", "Education researcher", "Counsellor",
        "Speech therapist", "Dietitian", "Public health specialist", "School counsellor",
    ),
    "investigative,enterprising": (
        "Management consultant", "Data scientist", "Entrepreneur", "Strategy analyst",
        "Market researcher", "Investment analyst", "New business developer", "Technical sales",
    ),
    "investigative,conventional": (
        "Accountant", "Programmer", "Statistician", "Pharmacist",
        "Systems engineer", "Patent researcher", "Clinical lab technician", "Information security specialist",
    ),
    "artistic,social": (
        "Art or music teacher", "Art therapist", "Community designer", "Writer",
        "Music therapist", "Yoga or pilates instructor", "Picture book author", "Workshop facilitator",
    ),
    "artistic,enterprising": (
        "Advertising creative", "Producer", "Brand manager", "Freelance designer",
        "Film director", "Fashion designer", "Online content creator", "Event producer",
    ),
    "artistic,conventional": (
        "Graphic designer", "Editor", "Web designer", "Translator",
        "DTP operator", "Proofreader", "Technical illustrator", "Photo retoucher",
    ),
    "social,enterprising": (
        "HR manager", "Sales team lead", "Education administrator", "Event planner",
        "Recruitment consultant", "Corporate trainer", "NPO/NGO manager", "Coach",
    ),
    "social,conventional": (
        "Office administrator", "Social worker", "Librarian", "Medical office clerk",
        "Childcare worker", "Administrative scrivener", "Care manager", "Receptionist or secretary",
    ),
    "enterprising,conventional": (
        "Business owner", "Project manager", "Banker", "Real estate agent",
        "Tax accountant", "Financial planner", "Store manager", "Sales planner",
    ),
}

# ──────────────────────────────────────────────────────────────────────────────
# Same-type table (one trait clearly dominant)
# ──────────────────────────────────────────────────────────────────────────────

CAREER_SAME_TYPE: dict[str, tuple[str, ...]] = {
    "realistic,realistic": (
        "Craftsperson", "Auto mechanic", "Civil engineering technician", "Electrician",
        "Farmer", "Chef", "Carpenter",
    ),
    "investigative,investigative": (
        "Researcher", "University professor", "Data analyst", "AI engineer",
        "Medical researcher", "Archaeologist", "Astronomer",
    ),
    "artistic,artistic": (
        "Painter", "Musician", "Novelist", "Actor", "Photographer", "Animator", "Choreographer",
    ),
    "social,social": (
        "Teacher", "Nursery teacher", "Social worker", "Nurse", "Counsellor", "Caregiver", "NPO staff",
    ),
    "enterprising,enterprising": (
        "Entrepreneur", "CEO", "Politician", "Lawyer", "Producer", "Diplomat", "Venture capitalist",
    ),
    "conventional,conventional": (
        "Civil servant", "Bookkeeper", "General affairs staff", "Systems operator",
        "Bank teller", "Data entry clerk", "Legal assistant",
    ),
}

CAREER_FALLBACK: tuple[str, ...] = (
    "You have the potential to thrive across a wide range of fields",
)


def suggest_careers(top_traits: Sequence[str]) -> list[str]:
    """Career suggestions for the top-2 interest traits.

    Parameters
    ----------
    top_traits:
        The two highest-ranked interest traits, in rank order.

    Returns
    -------
    list[str]
        A fresh list; the generic fallback when no table matches.
    """
    key = KEY_SEPARATOR.join(top_traits)
    reversed_key = KEY_SEPARATOR.join(reversed(list(top_traits)))

    for table_name, table, candidate in (
        ("pairs", CAREER_PAIRS, key),
        ("pairs", CAREER_PAIRS, reversed_key),
        ("same_type", CAREER_SAME_TYPE, key),
        ("same_type", CAREER_SAME_TYPE, reversed_key),
    ):
        if candidate in table:
            logger.debug("career.lookup_hit", table=table_name, key=candidate)
            return list(table[candidate])

    logger.info("career.lookup_fallback", key=key)
    return list(CAREER_FALLBACK)
