"""Tests for cached views and their invalidation by mutations."""
import uuid

import pytest

from devtrack.cache import tags
from devtrack.domain.statuses import TaskStatus

pytestmark = pytest.mark.integration


async def test_project_list_is_cached_and_refreshed_after_create(services, project):
    first = await services.views.project_list()
    assert [p.name for p in first] == [project.name]
    assert await services.cache.is_cached(tags.PROJECTS)

    await services.projects.create({"name": "Blog CMS"})

    assert not await services.cache.is_cached(tags.PROJECTS)
    names = [p.name for p in await services.views.project_list()]
    assert names == ["Blog CMS", project.name]


async def test_project_list_ordered_by_last_updated(services, project):
    other = await services.projects.create({"name": "Blog CMS"})
    feature = await services.features.create(project.id, {"name": "Cart"})
    await services.tasks.create(feature.id, {"title": "Drawer"})

    names = [p.name for p in await services.views.project_list()]
    assert names == [project.name, other.name]


async def test_project_summary_progress(services, feature):
    await services.tasks.create(feature.id, {"title": "A", "status": "Done"})
    await services.tasks.create(feature.id, {"title": "B"})
    await services.tasks.create(feature.id, {"title": "C"})

    [summary] = await services.views.project_list()
    assert summary.progress == 33
    assert summary.done_tasks == 1
    assert summary.total_tasks == 3


async def test_project_detail(services, project, feature):
    await services.tasks.create(feature.id, {"title": "A", "status": TaskStatus.DONE})
    await services.decisions.create(feature.id, {"text": "Use Zustand"})

    view = await services.views.project_detail(project.id)

    assert view.name == project.name
    assert view.progress == 100
    assert [f.name for f in view.features] == ["Shopping Cart"]
    assert view.features[0].progress == 100
    assert view.features[0].project_name == project.name
    assert [d.text for d in view.recent_decisions] == ["Use Zustand"]


async def test_project_detail_stale_after_task_write(services, project, feature):
    assert (await services.views.project_detail(project.id)).progress == 0

    await services.tasks.create(feature.id, {"title": "A", "status": "Done"})

    assert (await services.views.project_detail(project.id)).progress == 100


async def test_unknown_or_malformed_ids_return_none(services):
    assert await services.views.project_detail(uuid.uuid4()) is None
    assert await services.views.project_detail("nope") is None
    assert await services.views.feature_detail("nope") is None


async def test_feature_detail(services, feature):
    await services.tasks.create(feature.id, {"title": "A"})
    view = await services.views.feature_detail(feature.id)

    assert view.project_name == "E-Commerce Platform"
    assert [t.title for t in view.tasks] == ["A"]
    assert view.decisions == []
    assert view.progress == 0


async def test_feature_index_refreshed_after_rename(services, feature):
    assert [f.name for f in await services.views.feature_index()] == ["Shopping Cart"]

    await services.features.rename(feature.id, "Cart")

    assert [f.name for f in await services.views.feature_index()] == ["Cart"]


async def test_project_rename_refreshes_cached_feature_pages(services, project, feature):
    assert (await services.views.feature_detail(feature.id)).project_name == "E-Commerce Platform"

    await services.projects.rename(project.id, "Storefront")

    assert not await services.cache.is_cached(tags.feature(feature.id))
    assert (await services.views.feature_detail(feature.id)).project_name == "Storefront"


async def test_project_update_refreshes_feature_name_in_project_detail(services, project, feature):
    await services.views.project_detail(project.id)

    await services.projects.update_from_form(project.id, {"name": "Storefront", "tech_stack": "Django"})

    view = await services.views.project_detail(project.id)
    assert view.name == "Storefront"
    assert view.tech_stack == ["Django"]
    assert view.features[0].project_name == "Storefront"
