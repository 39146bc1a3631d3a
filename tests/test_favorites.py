# tests/test_favorites.py
import pytest
from pydantic import ValidationError

from looproute.core.errors import RouteNotFound
from looproute.services.mock_routes import MockRouteGenerator
from looproute.services.route_store import FavoritesService, InMemoryRouteStore


@pytest.fixture
def routes(loop_request):
    return MockRouteGenerator().generate_batch(loop_request)


@pytest.fixture
def service(routes):
    store = InMemoryRouteStore()
    for route in routes:
        store.save(route)
    return FavoritesService(store)


def test_toggle_returns_new_value(service, routes):
    original = routes[0]
    assert service.favorites() == []

    updated = service.toggle_favorite(original.id)

    assert updated.is_favorite is True
    assert original.is_favorite is False
    assert updated.id == original.id
    assert service.store.get(original.id) == updated
    assert service.favorites() == [updated]

    again = service.toggle_favorite(original.id)
    assert again.is_favorite is False
    assert service.favorites() == []


def test_toggle_unknown_route(service):
    with pytest.raises(RouteNotFound):
        service.toggle_favorite("nope")


def test_delete(service, routes):
    route_id = routes[1].id
    service.delete(route_id)
    assert service.store.get(route_id) is None
    with pytest.raises(RouteNotFound):
        service.delete(route_id)


def test_routes_are_immutable(routes):
    with pytest.raises(ValidationError):
        routes[0].is_favorite = True


def test_annotation_is_a_copy(routes):
    annotated = routes[0].with_annotation("Harbour Run", "Past the docks.")
    assert annotated.label == "Harbour Run"
    assert routes[0].label != "Harbour Run"
