"""Tests for the relational link store."""

import pytest

from brev.errors import DuplicateKeyError, StoreError
from brev.models import Link
from brev.store import LinkStore


def count_code(store, code):
    with store.session() as db:
        return db.query(Link).filter(Link.code == code).count()


class TestLinkStore:
    """Test link store operations."""

    def test_insert_link(self, store, sample_urls):
        link = store.insert_link("abc123", sample_urls[0])

        assert link.id is not None
        assert link.code == "abc123"
        assert link.original_url == sample_urls[0]
        assert link.clicks == 0
        assert link.created_at is not None

    def test_insert_duplicate_code(self, store, sample_urls):
        store.insert_link("taken", sample_urls[0])

        with pytest.raises(DuplicateKeyError) as exc_info:
            store.insert_link("taken", sample_urls[1])

        assert exc_info.value.code == "taken"
        assert "already exists" in str(exc_info.value)
        assert count_code(store, "taken") == 1

    def test_duplicate_is_a_store_error(self, store, sample_urls):
        store.insert_link("taken", sample_urls[0])

        with pytest.raises(StoreError):
            store.insert_link("taken", sample_urls[0])

    def test_codes_are_case_sensitive(self, store, sample_urls):
        store.insert_link("AbCdEf", sample_urls[0])
        store.insert_link("abcdef", sample_urls[1])

        assert store.code_exists("AbCdEf")
        assert store.code_exists("abcdef")
        assert not store.code_exists("ABCDEF")

    def test_list_links_newest_first(self, store, sample_urls):
        for i, url in enumerate(sample_urls):
            store.insert_link(f"code{i}", url)

        links = store.list_links()

        assert [link.code for link in links] == ["code2", "code1", "code0"]

    def test_list_links_empty(self, store):
        assert store.list_links() == []

    def test_increment_clicks(self, store, sample_urls):
        store.insert_link("clicky", sample_urls[0])

        first = store.increment_clicks("clicky")
        second = store.increment_clicks("clicky")

        assert first.clicks == 1
        assert second.clicks == 2
        assert second.original_url == sample_urls[0]

    def test_increment_treats_null_as_zero(self, store, sample_urls):
        link = store.insert_link("nullish", sample_urls[0])
        with store.session() as db:
            db.query(Link).filter(Link.id == link.id).update({Link.clicks: None})
            db.commit()

        assert store.increment_clicks("nullish").clicks == 1

    def test_increment_unknown_code(self, store, sample_urls):
        store.insert_link("exists", sample_urls[0])

        assert store.increment_clicks("missing") is None
        assert [link.clicks for link in store.list_links()] == [0]

    def test_delete_link(self, store, sample_urls):
        keep = store.insert_link("keep", sample_urls[0])
        drop = store.insert_link("drop", sample_urls[1])

        assert store.delete_link(drop.id) is True
        assert [link.id for link in store.list_links()] == [keep.id]

    def test_delete_unknown_id(self, store, sample_urls):
        store.insert_link("keep", sample_urls[0])

        assert store.delete_link(9999) is False
        assert len(store.list_links()) == 1

    @pytest.mark.parametrize("link_id", [0, -1, 2**31, 10**25])
    def test_delete_out_of_range_id(self, store, sample_urls, link_id):
        store.insert_link("keep", sample_urls[0])

        assert store.delete_link(link_id) is False
        assert len(store.list_links()) == 1

    def test_create_schema_is_idempotent(self, store, sample_urls):
        store.insert_link("survivor", sample_urls[0])
        store.create_schema()

        assert store.code_exists("survivor")

    def test_ping(self, store):
        assert store.ping() is True


class TestLinkStoreLifecycle:

    def test_operations_require_init(self, database_url):
        store = LinkStore(database_url)

        with pytest.raises(StoreError):
            store.list_links()

    def test_ping_after_close(self, database_url):
        store = LinkStore(database_url)
        store.init()
        store.close()

        assert store.ping() is False

    def test_init_and_close_are_idempotent(self, database_url):
        store = LinkStore(database_url)
        store.init()
        engine = store.engine
        store.init()

        assert store.engine is engine

        store.close()
        store.close()
        assert store.engine is None
