# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-13
# Description: test_review_service.py
# -----------------------------------------------------------------------------
import json

import pytest

from config.KBPrompts import NO_CONTEXT_PLACEHOLDER, REVIEW_SYSTEM_PROMPT
from kb_fakes import FakeChat, FakeEmbedder, unit
from services.KBReviewService import KBReviewService
from services.KBSearchService import KBSearchService
from source.KBSource import KBSource

TEXT = "pls send the report asap"


class SpySearch(KBSearchService):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    def search(self, query_text, *, threshold=None, max_results=None, filters=None):
        self.calls.append({"threshold": threshold, "max_results": max_results, "filters": filters})
        return super().search(query_text, threshold=threshold, max_results=max_results, filters=filters)


def _service(embedder, store, chat) -> KBReviewService:
    return KBReviewService(search_service=SpySearch(embedder=embedder, store=store), chat_client=chat)


def test_parsed_json_drives_result(embedder, store):
    payload = {
        "revised_text": "Please send the report as soon as possible.",
        "corrections": [
            {"type": "wording", "original": "pls", "revised": "Please", "reason": "Style guide, Source 1"},
            {"type": "wording", "original": "asap", "revised": "as soon as possible", "reason": "Source 1"},
        ],
    }
    chat = FakeChat(response="Sure!\n" + json.dumps(payload) + "\nDone.")

    result = _service(embedder, store, chat).review_text(TEXT)

    assert result.original_text == TEXT
    assert result.revised_text == payload["revised_text"]
    assert [c.to_dict() for c in result.corrections] == payload["corrections"]


def test_review_search_uses_review_thresholds_and_no_filters(embedder, store):
    chat = FakeChat(response="{}")
    svc = _service(embedder, store, chat)

    svc.review_text(TEXT)

    assert svc.search_service.calls == [{"threshold": 0.5, "max_results": 8, "filters": None}]
    assert chat.calls[0]["temperature"] == pytest.approx(0.2)


def test_review_does_not_short_circuit_on_zero_matches(embedder, store):
    chat = FakeChat(response="{}")
    result = _service(embedder, store, chat).review_text(TEXT)

    assert len(chat.calls) == 1
    messages = chat.calls[0]["messages"]
    assert messages[0] == {"role": "system", "content": REVIEW_SYSTEM_PROMPT}
    assert NO_CONTEXT_PLACEHOLDER in messages[1]["content"]
    assert TEXT in messages[1]["content"]
    assert result.sources == []


def test_review_prompt_covers_missing_rules_with_an_info_correction():
    assert "structure | wording | addition | deletion | info" in REVIEW_SYSTEM_PROMPT
    assert f'"{NO_CONTEXT_PLACEHOLDER}"' in REVIEW_SYSTEM_PROMPT
    assert "leave the text unchanged" in REVIEW_SYSTEM_PROMPT


def test_matching_rules_are_returned_as_sources(store):
    embedder = FakeEmbedder(overrides={TEXT: unit(1.0)})
    store.insert(KBSource(title="Style guide", content="Avoid abbreviations like asap.", embedding=unit(1.0, 0.3)))
    store.insert(KBSource(title="Unrelated", content="Parking rules.", embedding=unit(0.0, 1.0)))

    result = _service(embedder, store, FakeChat(response="{}")).review_text(TEXT)
    assert [s.title for s in result.sources] == ["Style guide"]


def test_missing_fields_default_to_original_and_empty(embedder, store):
    result = _service(embedder, store, FakeChat(response='{"note": "nothing to fix"}')).review_text(TEXT)
    assert result.revised_text == TEXT
    assert result.corrections == []


def test_empty_revised_text_falls_back_to_original(embedder, store):
    result = _service(embedder, store, FakeChat(response='{"revised_text": "", "corrections": []}')).review_text(TEXT)
    assert result.revised_text == TEXT


def test_no_json_gives_noop_edit(embedder, store):
    result = _service(embedder, store, FakeChat(response="Looks good to me.")).review_text(TEXT)
    assert result.revised_text == TEXT
    assert result.corrections == []


def test_unparseable_json_gives_single_info_correction(embedder, store):
    raw = 'I changed a few things: {"revised_text": "Please send", corrections: [}'
    result = _service(embedder, store, FakeChat(response=raw)).review_text(TEXT)

    assert result.revised_text == TEXT
    assert len(result.corrections) == 1
    info = result.corrections[0]
    assert info.type == "info"
    assert info.original == ""
    assert info.revised == ""
    assert info.reason == raw


def test_malformed_correction_entries_are_tolerated(embedder, store):
    raw = json.dumps({
        "revised_text": "x",
        "corrections": ["not an object", {"type": "deletion", "original": "asap"}],
    })
    result = _service(embedder, store, FakeChat(response=raw)).review_text(TEXT)

    assert len(result.corrections) == 1
    c = result.corrections[0]
    assert (c.type, c.original, c.revised, c.reason) == ("deletion", "asap", "", "")


def test_completion_failure_propagates(embedder, store):
    with pytest.raises(RuntimeError):
        _service(embedder, store, FakeChat(error=RuntimeError("boom"))).review_text(TEXT)


def test_blank_text_rejected(embedder, store, chat):
    with pytest.raises(ValueError):
        _service(embedder, store, chat).review_text("")
