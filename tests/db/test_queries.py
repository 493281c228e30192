"""Tests for the read accessors."""
import uuid

import pytest

from devtrack.queries.decisions import get_decision, list_decisions_by_project
from devtrack.queries.features import get_feature, list_features_by_project
from devtrack.queries.projects import get_active_project, get_project, list_projects

pytestmark = pytest.mark.integration


async def test_relations_stay_unloaded_unless_requested(services, feature, session_factory):
    await services.tasks.create(feature.id, {"title": "Drawer"})

    async with session_factory() as session:
        bare = await get_project(session, feature.project_id)
        full = await get_project(session, feature.project_id, with_tasks=True)
        plain_feature = await get_feature(session, feature.id)

    assert bare.features is None
    assert [t.title for t in full.features[0].tasks] == ["Drawer"]
    assert full.features[0].decisions is None
    assert plain_feature.tasks is None


async def test_features_by_project_oldest_first(services, project, session_factory):
    await services.features.create(project.id, {"name": "First"})
    await services.features.create(project.id, {"name": "Second"})

    async with session_factory() as session:
        features = await list_features_by_project(session, project.id, with_tasks=True)
        assert await list_features_by_project(session, "bad-id") == []

    assert [f.name for f in features] == ["First", "Second"]
    assert features[0].tasks == []


async def test_active_project_is_latest_in_progress(services, session_factory):
    await services.projects.create({"name": "Planned"})
    older = await services.projects.create({"name": "Older", "status": "In Progress"})
    newer = await services.projects.create({"name": "Newer", "status": "In Progress"})

    async with session_factory() as session:
        assert (await get_active_project(session)).id == newer.id

    await services.projects.update(older.id, {"description": "touched"})

    async with session_factory() as session:
        assert (await get_active_project(session)).id == older.id
        assert [p.name for p in await list_projects(session)][0] == "Older"


async def test_no_active_project(services, project, session_factory):
    async with session_factory() as session:
        assert await get_active_project(session) is None


async def test_decision_lookups(services, feature, session_factory):
    decision = await services.decisions.create(feature.id, {"text": "Use Zustand"})

    async with session_factory() as session:
        assert (await get_decision(session, decision.id)).text == "Use Zustand"
        assert await get_decision(session, uuid.uuid4()) is None
        recent = await list_decisions_by_project(session, feature.project_id, limit=1)

    assert [d.id for d in recent] == [decision.id]
