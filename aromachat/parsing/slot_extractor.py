"""
Keyword-driven slot extraction for fragrance preferences.

The extractor is a small rule engine: KEYWORD_TABLE holds
(category, keyword, canonical label) triples and a single matching loop turns
a free-text message into Slots. Adding a keyword is a data change.

A keyword matches wherever it occurs in the lowercased message, so stems such
as "amadeir" cover "amadeirado" and "amadeirada".
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass, field, fields
from typing import Dict, Iterable, List, Tuple

from aromachat.interview.preference_slots import (
    CLARIFICATION_ORDER,
    HASH_ORDER,
    PREFERENCE_SLOTS,
    SEARCH_QUERY_ORDER,
    SLOTS_BY_NAME,
)


@dataclass
class Slots:
    """User preference state: one ordered, duplicate-free list of canonical tags per category."""
    occasions: List[str] = field(default_factory=list)
    climate: List[str] = field(default_factory=list)
    seasons: List[str] = field(default_factory=list)
    intensity: List[str] = field(default_factory=list)
    accords: List[str] = field(default_factory=list)
    budget: List[str] = field(default_factory=list)
    longevity: List[str] = field(default_factory=list)
    gender: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    def values(self, category: str) -> List[str]:
        """Return the values of a category by its public name (e.g. "Accords")."""
        return getattr(self, SLOTS_BY_NAME[category].field_name)

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    def as_dict(self) -> Dict[str, List[str]]:
        return {slot.name: list(getattr(self, slot.field_name)) for slot in PREFERENCE_SLOTS}


# (category, keyword, canonical label). Table order is first-seen order.
KEYWORD_TABLE: List[Tuple[str, str, str]] = [
    # Occasions
    ("Occasions", "noite", "Noite"),
    ("Occasions", "balada", "Noite"),
    ("Occasions", "dia", "Dia"),
    ("Occasions", "trabalho", "Trabalho"),
    ("Occasions", "escritório", "Trabalho"),
    ("Occasions", "escritorio", "Trabalho"),
    ("Occasions", "casual", "Casual"),
    ("Occasions", "encontro", "Encontro"),
    ("Occasions", "festa", "Festa"),
    # Climate
    ("Climate", "frio", "Frio"),
    ("Climate", "quente", "Quente"),
    ("Climate", "calor", "Quente"),
    ("Climate", "úmido", "Úmido"),
    ("Climate", "umido", "Úmido"),
    ("Climate", "seco", "Seco"),
    # Seasons
    ("Seasons", "verão", "Verão"),
    ("Seasons", "verao", "Verão"),
    ("Seasons", "inverno", "Inverno"),
    ("Seasons", "outono", "Outono"),
    ("Seasons", "primavera", "Primavera"),
    # Intensity
    ("Intensity", "suave", "Suave"),
    ("Intensity", "leve", "Suave"),
    ("Intensity", "moderad", "Moderada"),
    ("Intensity", "forte", "Forte"),
    ("Intensity", "intens", "Forte"),
    # Accords
    ("Accords", "cítric", "Cítrico"),
    ("Accords", "citric", "Cítrico"),
    ("Accords", "amadeirad", "Amadeirado"),
    ("Accords", "madeira", "Amadeirado"),
    ("Accords", "floral", "Floral"),
    ("Accords", "flores", "Floral"),
    ("Accords", "oriental", "Oriental"),
    ("Accords", "especiaria", "Especiado"),
    ("Accords", "especiad", "Especiado"),
    ("Accords", "frutad", "Frutado"),
    ("Accords", "verde", "Verde"),
    ("Accords", "aquátic", "Aquático"),
    ("Accords", "aquatic", "Aquático"),
    ("Accords", "doce", "Doce"),
    ("Accords", "baunilha", "Baunilha"),
    ("Accords", "musk", "Almiscarado"),
    ("Accords", "almiscar", "Almiscarado"),
    # Budget
    ("Budget", "barato", "Baixo"),
    ("Budget", "econômico", "Baixo"),
    ("Budget", "economico", "Baixo"),
    ("Budget", "baixo", "Baixo"),
    ("Budget", "médio", "Médio"),
    ("Budget", "medio", "Médio"),
    ("Budget", "alto", "Alto"),
    ("Budget", "caro", "Alto"),
    # Longevity
    ("Longevity", "curta", "Curta"),
    ("Longevity", "média", "Média"),
    ("Longevity", "media", "Média"),
    ("Longevity", "longa", "Longa"),
    ("Longevity", "fixação", "Longa"),
    ("Longevity", "fixacao", "Longa"),
    ("Longevity", "durabilidade", "Longa"),
    ("Longevity", "duradour", "Longa"),
    # Gender
    ("Gender", "masculin", "Masculino"),
    ("Gender", "homem", "Masculino"),
    ("Gender", "feminin", "Feminino"),
    ("Gender", "mulher", "Feminino"),
    ("Gender", "unissex", "Unissex"),
    ("Gender", "unisex", "Unissex"),
    # Notes
    ("Notes", "baunilha", "Baunilha"),
    ("Notes", "rosa", "Rosa"),
    ("Notes", "jasmim", "Jasmim"),
    ("Notes", "lavanda", "Lavanda"),
    ("Notes", "bergamota", "Bergamota"),
    ("Notes", "sândalo", "Sândalo"),
    ("Notes", "sandalo", "Sândalo"),
    ("Notes", "patchouli", "Patchouli"),
    ("Notes", "vetiver", "Vetiver"),
    ("Notes", "âmbar", "Âmbar"),
    ("Notes", "ambar", "Âmbar"),
    ("Notes", "limão", "Limão"),
    ("Notes", "limao", "Limão"),
    ("Notes", "couro", "Couro"),
    ("Notes", "oud", "Oud"),
]


def _load_table(table: Iterable[Tuple[str, str, str]]) -> List[Tuple[str, str, str]]:
    loaded = []
    for category, keyword, label in table:
        if category not in SLOTS_BY_NAME:
            raise ValueError(f"Unknown slot category in keyword table: {category}")
        loaded.append((category, keyword.lower(), label))
    return loaded


_KEYWORDS = _load_table(KEYWORD_TABLE)


def _dedup(values: Iterable[str]) -> List[str]:
    """Drop duplicates, keeping first-seen order."""
    seen = set()
    out = []
    for value in values:
        if value not in seen:
            seen.add(value)
            out.append(value)
    return out


def parse(message: str) -> Slots:
    """Extract canonical slot values from a single message."""
    text = (message or "").lower()
    slots = Slots()
    for category, keyword, label in _KEYWORDS:
        if keyword not in text:
            continue
        bucket = slots.values(category)
        if label not in bucket:
            bucket.append(label)
    return slots


def merge(a: Slots, b: Slots) -> Slots:
    """Combine two slot states (a's values first), deduplicated. Neither input is mutated."""
    merged = Slots()
    for slot in PREFERENCE_SLOTS:
        combined = list(getattr(a, slot.field_name)) + list(getattr(b, slot.field_name))
        setattr(merged, slot.field_name, _dedup(combined))
    return merged


def next_missing(slots: Slots) -> str:
    """Return the next category to clarify, or "" when every asked-about category is filled."""
    for category in CLARIFICATION_ORDER:
        if not slots.values(category):
            return category
    return ""


def profile_canonical_string(slots: Slots) -> str:
    parts = []
    for category in HASH_ORDER:
        slot = SLOTS_BY_NAME[category]
        parts.append(f"{slot.short_code}:{','.join(slots.values(category))}")
    return "|".join(parts)


def profile_hash(slots: Slots) -> str:
    """Deterministic short fingerprint of the slot state (cache key, not a security hash)."""
    digest = hashlib.sha1(profile_canonical_string(slots).encode("utf-8")).digest()
    return digest[:8].hex()


def build_search_query(slots: Slots, message: str) -> str:
    """Append the top preference of each relevant category to the raw message."""
    parts = [message]
    for category in SEARCH_QUERY_ORDER:
        values = slots.values(category)
        if values:
            parts.append(values[0])
    return " ".join(parts)
