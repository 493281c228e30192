"""Every descendant write must move the owning project's last_updated forward."""
import uuid
from datetime import datetime, timezone

import pytest

import devtrack.services.mutation as mutation_mod
import devtrack.services.project_service as project_service_mod
from devtrack.core.exceptions import NotFoundError, ValidationError
from devtrack.queries.projects import get_project

pytestmark = pytest.mark.integration

FROZEN_NOW = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def freeze_clock(monkeypatch):
    """Return a callable that pins the write-path clock to FROZEN_NOW."""

    def freeze():
        monkeypatch.setattr(mutation_mod, "utcnow", lambda: FROZEN_NOW)
        monkeypatch.setattr(project_service_mod, "utcnow", lambda: FROZEN_NOW)

    return freeze


@pytest.fixture
async def tree(services, project, feature):
    task = await services.tasks.create(feature.id, {"title": "Drawer"})
    decision = await services.decisions.create(feature.id, {"text": "Use Zustand"})
    return {"project": project, "feature": feature, "task": task, "decision": decision}


async def _last_updated(session_factory, project_id):
    async with session_factory() as session:
        return (await get_project(session, project_id)).last_updated


WRITES = {
    "feature_create": lambda s, t: s.features.create(t["project"].id, {"name": "Stripe Integration"}),
    "feature_update": lambda s, t: s.features.update(t["feature"].id, {"status": "Done"}),
    "feature_empty_update": lambda s, t: s.features.update(t["feature"].id, {}),
    "feature_rename": lambda s, t: s.features.rename(t["feature"].id, "Cart v2"),
    "feature_form_update": lambda s, t: s.features.update_from_form(t["feature"].id, {"name": "Cart"}),
    "feature_delete": lambda s, t: s.features.delete(t["feature"].id),
    "task_create": lambda s, t: s.tasks.create(t["feature"].id, {"title": "Quantity controls"}),
    "task_update": lambda s, t: s.tasks.update(t["task"].id, {"description": "Slide-out"}),
    "task_empty_update": lambda s, t: s.tasks.update(t["task"].id, {}),
    "task_set_status": lambda s, t: s.tasks.set_status(t["task"].id, "Done"),
    "task_delete": lambda s, t: s.tasks.delete(t["task"].id),
    "decision_create": lambda s, t: s.decisions.create(t["feature"].id, {"text": "Flexbox over Grid"}),
    "decision_update": lambda s, t: s.decisions.update(t["decision"].id, {"cons": ["New dependency"]}),
    "decision_empty_update": lambda s, t: s.decisions.update(t["decision"].id, {}),
    "decision_delete": lambda s, t: s.decisions.delete(t["decision"].id),
    "project_update": lambda s, t: s.projects.update(t["project"].id, {"status": "Launched"}),
    "project_empty_update": lambda s, t: s.projects.update(t["project"].id, {}),
    "project_rename": lambda s, t: s.projects.rename(t["project"].id, "Storefront"),
}


@pytest.mark.parametrize("write", list(WRITES), ids=list(WRITES))
async def test_write_sets_project_last_updated(services, tree, session_factory, freeze_clock, write):
    before = await _last_updated(session_factory, tree["project"].id)
    assert before < FROZEN_NOW

    freeze_clock()
    await WRITES[write](services, tree)

    assert await _last_updated(session_factory, tree["project"].id) == FROZEN_NOW


async def test_other_projects_untouched(services, tree, session_factory, freeze_clock):
    other = await services.projects.create({"name": "Blog CMS"})
    before = await _last_updated(session_factory, other.id)

    freeze_clock()
    await services.tasks.set_status(tree["task"].id, "Done")

    assert await _last_updated(session_factory, other.id) == before


async def test_rejected_writes_do_not_touch(services, tree, session_factory, freeze_clock):
    before = await _last_updated(session_factory, tree["project"].id)
    freeze_clock()

    with pytest.raises(ValidationError):
        await services.tasks.update(tree["task"].id, {"status": "Blocked"})
    with pytest.raises(NotFoundError):
        await services.decisions.update(uuid.uuid4(), {"text": "Ghost"})
    with pytest.raises(NotFoundError):
        await services.tasks.create(uuid.uuid4(), {"title": "Orphan"})

    assert await _last_updated(session_factory, tree["project"].id) == before
