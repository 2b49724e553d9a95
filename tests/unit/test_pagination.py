"""Tests for the pagination driver."""

import json

import pytest
import requests

from errors import FetchError, ParseError
from scrapers.pagination import collect_all, extract_records, extract_total

URL = "https://api.example/speakers"


def make_pages(sizes):
    """Pages of {"id": n} records with consecutive ids."""
    pages = []
    next_id = 0
    for size in sizes:
        pages.append([{"id": str(next_id + i)} for i in range(size)])
        next_id += size
    return pages


class TestExtractRecords:
    """Tests for envelope handling."""

    @pytest.mark.parametrize("payload", [
        [{"id": "1"}],
        {"data": [{"id": "1"}]},
        {"results": [{"id": "1"}], "total": 1},
        {"data": {"items": [{"id": "1"}]}},
        {"hits": [{"id": "1"}], "nbHits": 1},
    ])
    def test_known_envelopes(self, payload):
        assert extract_records(payload) == [{"id": "1"}]

    @pytest.mark.parametrize("payload", [{"error": "nope"}, "text", None, {"data": "x"}])
    def test_missing_envelope(self, payload):
        with pytest.raises(ParseError):
            extract_records(payload, URL)

    @pytest.mark.parametrize("payload,total", [
        ({"total": 42}, 42),
        ({"totalCount": "7"}, 7),
        ({"meta": {"total": 3}}, 3),
        ({"total": True}, None),
        ({"count": 5}, None),
        ({"count": 2, "total": 9}, 9),
        ({"data": []}, None),
        ([], None),
    ])
    def test_total(self, payload, total):
        assert extract_total(payload) == total


class TestCollectAll:
    """Tests for collect_all."""

    def test_empty_first_page(self, paged_session):
        """An empty dataset ends pagination without error."""
        session = paged_session([[]])
        assert collect_all(URL, 10, session=session) == []
        assert session.requested == [1]

    def test_stops_on_empty_page(self, paged_session):
        pages = make_pages([3, 3, 1])
        session = paged_session(pages)

        records = collect_all(URL, 3, session=session)

        assert [r["id"] for r in records] == [str(i) for i in range(7)]
        assert session.requested == [1, 2, 3, 4]

    def test_stops_at_total(self, paged_session):
        """A known total ends pagination without requesting an empty page."""
        pages = make_pages([3, 3, 1])
        session = paged_session(pages, total=7)

        records = collect_all(URL, 3, session=session)

        assert len(records) == 7
        assert session.requested == [1, 2, 3]

    def test_page_failure_aborts(self, paged_session):
        """A failing page raises instead of returning a partial result."""
        session = paged_session(make_pages([2, 2, 2]), fail_pages={2})
        with pytest.raises(FetchError):
            collect_all(URL, 2, session=session)

    def test_max_pages(self, paged_session):
        session = paged_session(make_pages([2] * 10))
        records = collect_all(URL, 2, session=session, max_pages=3)
        assert len(records) == 6
        assert session.requested == [1, 2, 3]

    def test_query_parameters(self, scripted_session, fake_response):
        session = scripted_session([fake_response(200, '{"data": []}')])
        collect_all(URL, 50, session=session, params={"lang": "en"}, size_param="per_page", first_page=0)
        assert session.calls[0][2] == {"lang": "en", "page": 0, "per_page": 50}

    def test_parallel_matches_sequential(self, paged_session):
        """Concurrent fetching returns the same records in the same order."""
        pages = make_pages([4, 4, 4, 4, 4, 2])

        sequential = collect_all(URL, 4, session=paged_session(pages, total=22))
        parallel_session = paged_session(pages, total=22)
        parallel = collect_all(URL, 4, session=parallel_session, workers=3)

        assert parallel == sequential
        assert [r["id"] for r in parallel] == [str(i) for i in range(22)]
        assert sorted(parallel_session.requested) == [1, 2, 3, 4, 5, 6]

    def test_parallel_failure_aborts(self, paged_session):
        session = paged_session(make_pages([2, 2, 2, 2]), total=8, fail_pages={3})
        with pytest.raises(FetchError):
            collect_all(URL, 2, session=session, workers=2)

    def test_parallel_without_total_is_sequential(self, paged_session):
        session = paged_session(make_pages([2, 2]))
        records = collect_all(URL, 2, session=session, workers=4)
        assert len(records) == 4
        assert session.requested == [1, 2, 3]

    def test_stops_when_page_is_ignored(self, scripted_session, fake_response):
        """An endpoint returning the same page for every index is read once."""
        body = json.dumps({"data": [{"name": "Jane Doe"}, {"name": "John Roe"}]})
        session = scripted_session([fake_response(200, body), fake_response(200, body)])

        records = collect_all(URL, 100, session=session)

        assert records == [{"name": "Jane Doe"}, {"name": "John Roe"}]
        assert len(session.calls) == 2

    def test_transient_failures_yield_complete_records(self, scripted_session, fake_response):
        """A page that fails twice then succeeds still gives every record."""
        body = json.dumps({"data": [{"id": "1"}, {"id": "2"}], "total": 2})
        session = scripted_session([
            requests.ConnectionError("reset"),
            fake_response(500),
            fake_response(200, body),
        ])

        assert collect_all(URL, 2, session=session) == [{"id": "1"}, {"id": "2"}]
        assert len(session.calls) == 3

    def test_parallel_max_pages_warns(self, paged_session, caplog):
        session = paged_session(make_pages([2] * 5), total=10)

        with caplog.at_level("WARNING"):
            records = collect_all(URL, 2, session=session, workers=2, max_pages=3)

        assert len(records) == 6
        assert sorted(session.requested) == [1, 2, 3]
        assert "only fetching 3" in caplog.text
