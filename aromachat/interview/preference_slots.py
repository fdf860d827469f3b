"""
Preference slot definitions for the fragrance interview.

Each slot is a named category of canonical tags. The priority order decides
which clarifying question the assistant asks next; the short code feeds the
profile hash used as a cache key.
"""
from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class PreferenceSlot:
    """Definition of a single preference category."""
    name: str               # Category name exposed to callers, e.g. "Accords"
    field_name: str         # Attribute on Slots
    short_code: str         # Prefix inside the profile hash canonical string
    follow_up_question: str = ""


# Declaration order is the stable category order (summary text, Slots fields)
PREFERENCE_SLOTS: List[PreferenceSlot] = [
    PreferenceSlot(
        name="Occasions",
        field_name="occasions",
        short_code="oc",
        follow_up_question="Vai usar mais em qual ocasião (trabalho, festa, encontro)?",
    ),
    PreferenceSlot(
        name="Climate",
        field_name="climate",
        short_code="cl",
        follow_up_question="O clima será mais frio, quente, úmido ou seco?",
    ),
    PreferenceSlot(
        name="Seasons",
        field_name="seasons",
        short_code="se",
        follow_up_question="Alguma estação específica (verão, inverno)?",
    ),
    PreferenceSlot(
        name="Intensity",
        field_name="intensity",
        short_code="in",
        follow_up_question="Prefere algo suave, moderado ou forte?",
    ),
    PreferenceSlot(
        name="Accords",
        field_name="accords",
        short_code="ac",
        follow_up_question="Você tem preferência por algum acorde (cítrico, floral, amadeirado)?",
    ),
    PreferenceSlot(
        name="Budget",
        field_name="budget",
        short_code="bu",
        follow_up_question="Tem alguma faixa de preço em mente?",
    ),
    PreferenceSlot(
        name="Longevity",
        field_name="longevity",
        short_code="lo",
        follow_up_question="Prefere uma fixação curta, média ou longa?",
    ),
    PreferenceSlot(
        name="Gender",
        field_name="gender",
        short_code="ge",
        follow_up_question="Você procura um perfume masculino, feminino ou unissex?",
    ),
    PreferenceSlot(
        name="Notes",
        field_name="notes",
        short_code="no",
    ),
]

SLOTS_BY_NAME: Dict[str, PreferenceSlot] = {slot.name: slot for slot in PREFERENCE_SLOTS}

# Clarification order; Notes is never asked for
CLARIFICATION_ORDER: List[str] = [
    "Occasions", "Climate", "Intensity", "Accords", "Budget", "Longevity", "Seasons", "Gender",
]

# Category order inside the profile hash canonical string
HASH_ORDER: List[str] = [
    "Occasions", "Climate", "Intensity", "Accords", "Budget", "Longevity", "Seasons", "Gender", "Notes",
]

# First value of each category appended to the full-text query, in precedence order
SEARCH_QUERY_ORDER: List[str] = ["Gender", "Accords", "Occasions", "Seasons", "Climate", "Notes"]

GENERIC_REFINEMENT_HINT = "Posso refinar por intensidade, preço ou longevidade."


def get_follow_up_question(category: str) -> str:
    """Return the clarifying question for a category, or the generic refinement hint."""
    slot = SLOTS_BY_NAME.get(category)
    if slot and slot.follow_up_question:
        return slot.follow_up_question
    return GENERIC_REFINEMENT_HINT
