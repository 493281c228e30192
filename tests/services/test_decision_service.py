"""Tests for DecisionService."""
import uuid
from datetime import datetime, timezone

import pytest

from devtrack.core.exceptions import NotFoundError, ValidationError
from devtrack.queries.decisions import list_decisions_by_feature

pytestmark = pytest.mark.integration


async def test_create_defaults(services, feature):
    decision = await services.decisions.create(feature.id, {"text": "Use Zustand for cart state"})

    assert decision.pros == []
    assert decision.cons == []
    assert decision.alternatives is None
    assert decision.date.tzinfo is not None


async def test_create_with_lists(services, feature):
    decision = await services.decisions.create(
        feature.id,
        {
            "text": "Use Zustand for cart state",
            "date": "2026-02-08T00:00:00Z",
            "pros": ["Simpler API", "Built-in persistence"],
            "cons": ["Additional dependency"],
            "alternatives": "React Context, Redux",
        },
    )
    assert decision.date == datetime(2026, 2, 8, tzinfo=timezone.utc)
    assert decision.pros == ["Simpler API", "Built-in persistence"]


async def test_create_from_form_splits_lines(services, feature):
    decision = await services.decisions.create_from_form(
        feature.id, {"text": "Flexbox over Grid", "pros": "Support\nSimplicity\n\n", "cons": ""}
    )
    assert decision.pros == ["Support", "Simplicity"]
    assert decision.cons == []


async def test_blank_text_rejected(services, feature):
    with pytest.raises(ValidationError):
        await services.decisions.create(feature.id, {"text": "  "})


async def test_create_under_missing_feature(services):
    with pytest.raises(NotFoundError):
        await services.decisions.create(uuid.uuid4(), {"text": "Orphan"})


async def test_update_null_pros_become_empty(services, feature):
    decision = await services.decisions.create(feature.id, {"text": "Choice", "pros": ["A"]})
    updated = await services.decisions.update(decision.id, {"pros": None})
    assert updated.pros == []
    assert updated.text == "Choice"


async def test_update_from_form_keeps_date_when_blank(services, feature):
    decision = await services.decisions.create(feature.id, {"text": "Choice", "date": "2026-02-12T00:00:00Z"})
    updated = await services.decisions.update_from_form(decision.id, {"text": "Revised", "date": ""})
    assert updated.text == "Revised"
    assert updated.date == decision.date


async def test_listed_newest_first(services, feature, session_factory):
    await services.decisions.create(feature.id, {"text": "Older", "date": "2026-02-08T00:00:00Z"})
    await services.decisions.create(feature.id, {"text": "Newer", "date": "2026-02-16T00:00:00Z"})

    async with session_factory() as session:
        decisions = await list_decisions_by_feature(session, feature.id)
    assert [d.text for d in decisions] == ["Newer", "Older"]


async def test_delete(services, feature):
    decision = await services.decisions.create(feature.id, {"text": "Temporary"})
    await services.decisions.delete(decision.id)
    with pytest.raises(NotFoundError):
        await services.decisions.update(decision.id, {"text": "Gone"})
