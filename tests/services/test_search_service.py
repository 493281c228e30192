"""Tests for SearchService."""
import pytest

from devtrack.services.search_service import SearchService, like_pattern

pytestmark = pytest.mark.integration


def _failing_session_factory():
    raise AssertionError("storage must not be touched for short queries")


@pytest.fixture
async def catalog(services):
    shop = await services.projects.create({"name": "E-Commerce Platform"})
    blog = await services.projects.create({"name": "Blog CMS"})
    await services.features.create(shop.id, {"name": "Shopping Cart"})
    await services.features.create(shop.id, {"name": "Product Catalog"})
    await services.features.create(blog.id, {"name": "Admin Dashboard"})
    return {"shop": shop, "blog": blog}


@pytest.mark.unit
@pytest.mark.parametrize("query", ["", "c"])
async def test_short_query_returns_empty_without_storage(query):
    service = SearchService(_failing_session_factory)
    results = await service.search(query)
    assert results.projects == []
    assert results.features == []


@pytest.mark.unit
def test_like_pattern_escapes_wildcards():
    assert like_pattern("50%_off") == "%50\\%\\_off%"


async def test_feature_match_carries_project_name(services, catalog):
    results = await services.search.search("cart")

    assert [f.name for f in results.features] == ["Shopping Cart"]
    assert results.features[0].project_name == "E-Commerce Platform"
    assert results.projects == []


async def test_case_insensitive_project_match(services, catalog):
    results = await services.search.search("BLOG")
    assert [p.name for p in results.projects] == ["Blog CMS"]


async def test_wildcards_match_literally(services, catalog):
    results = await services.search.search("%%")
    assert results.projects == []
    assert results.features == []


async def test_results_capped(services):
    for i in range(7):
        await services.projects.create({"name": f"Alpha {i}"})

    results = await services.search.search("alpha")
    assert len(results.projects) == 5


async def test_projects_ordered_by_last_updated(services, catalog):
    await services.projects.create({"name": "Blog Redesign"})
    await services.projects.update(catalog["blog"].id, {"description": "touched"})

    results = await services.search.search("blog")
    assert [p.name for p in results.projects] == ["Blog CMS", "Blog Redesign"]


@pytest.mark.unit
async def test_length_counts_raw_characters():
    """Whitespace is not trimmed: " c" is two characters and reaches storage."""
    service = SearchService(_failing_session_factory)
    with pytest.raises(AssertionError):
        await service.search(" c")


async def test_inner_whitespace_is_part_of_the_match(services, catalog):
    results = await services.search.search("g c")
    assert [p.name for p in results.projects] == ["Blog CMS"]
