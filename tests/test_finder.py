import time
import pytest
from sizefinder.errors import InvalidMeasurement
from sizefinder.schemas.size import FindSizeMessage, OptionsInfo, UserMeasurements
from sizefinder.services import finder as finder_module
from sizefinder.services.finder import NOT_FOUND_MESSAGE, SizeFinder


SELECT_HTML = '<select name="size"><option>S</option><option>M</option><option>L</option></select>'
PLAIN_HTML = "<h1>Scarf</h1><p>Soft wool scarf.</p>"


def test_find_size_with_options():
    rec, info = SizeFinder().find_size(SELECT_HTML, UserMeasurements(chest=38))
    assert isinstance(info, OptionsInfo)
    assert info.sizes == ["S", "M", "L"]
    assert rec.size == "M"
    assert rec.source == "options"


def test_find_size_without_sizing_uses_generic():
    rec, info = SizeFinder().find_size(PLAIN_HTML, UserMeasurements(chest=47))
    assert info is None
    assert rec.size == "XXL"
    assert rec.source == "generic"


def test_locate_is_cached_per_document():
    finder = SizeFinder(cache_ttl=600)
    calls = []
    original = finder.locator.find
    finder.locator.find = lambda doc: calls.append(1) or original(doc)

    finder.locate(SELECT_HTML)
    finder.locate(SELECT_HTML)
    assert len(calls) == 1

    finder.locate(PLAIN_HTML)
    assert len(calls) == 2


def test_cache_can_be_disabled():
    finder = SizeFinder(cache_ttl=0)
    calls = []
    original = finder.locator.find
    finder.locator.find = lambda doc: calls.append(1) or original(doc)

    finder.locate(SELECT_HTML)
    finder.locate(SELECT_HTML)
    assert len(calls) == 2


def test_handle_message_find_size():
    msg = FindSizeMessage(type="FIND_SIZE", measurements=UserMeasurements(chest=38), html=SELECT_HTML)
    resp = SizeFinder().handle_message(msg)
    assert resp.size == "M"
    assert resp.explanation.endswith("This size is available.")


def test_handle_message_unknown_type():
    resp = SizeFinder().handle_message(FindSizeMessage(type="PING"))
    assert resp.size is None
    assert resp.explanation == NOT_FOUND_MESSAGE


def test_handle_message_invalid_chest():
    msg = FindSizeMessage(type="FIND_SIZE", measurements=UserMeasurements(), html=SELECT_HTML)
    with pytest.raises(InvalidMeasurement):
        SizeFinder().handle_message(msg)


def test_expired_cache_entries_are_evicted(monkeypatch):
    finder = SizeFinder(cache_ttl=1)
    start = time.time()
    monkeypatch.setattr(finder_module.time, "time", lambda: start)
    for i in range(20):
        finder.locate(f"<p>Page {i}</p>")
    assert len(finder._cache) == 20

    # Past the TTL: a read drops its own stale entry, a write sweeps the rest
    monkeypatch.setattr(finder_module.time, "time", lambda: start + 5)
    finder.locate("<p>Page 0</p>")
    assert len(finder._cache) == 1
    finder.locate("<p>Fresh page</p>")
    assert len(finder._cache) == 2
