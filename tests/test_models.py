"""Tests for payload model defaults and the slot dictionary view."""

from aromachat.api.models import ChatReply, ChatRequest, RecommendRequest, RecommendResponse
from aromachat.parsing.slot_extractor import parse


def test_chat_request_defaults_to_anonymous():
    request = ChatRequest(message="quero um perfume")
    assert request.session_id is None


def test_recommend_request_default_limit():
    assert RecommendRequest(message="perfume floral").limit == 5


def test_reply_defaults():
    reply = ChatReply(reply="Olá")
    assert reply.model_dump() == {"reply": "Olá", "suggestions": [], "follow_up_hint": ""}
    assert RecommendResponse().model_dump() == {"suggestions": [], "reasoning": ""}


def test_slots_as_dict_uses_public_category_names():
    prefs = parse("floral para o trabalho").as_dict()
    assert list(prefs) == [
        "Occasions", "Climate", "Seasons", "Intensity", "Accords",
        "Budget", "Longevity", "Gender", "Notes",
    ]
    assert prefs["Accords"] == ["Floral"]
    assert prefs["Occasions"] == ["Trabalho"]
    assert prefs["Budget"] == []
