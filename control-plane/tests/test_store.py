"""Tests for store.object_store.SQLObjectStore."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.deadline import Deadline
from core.errors import StoreError
from store.object_store import SQLObjectStore, canonical_json


def _set_label(key: str, value: str):
    def mutate(document: dict) -> dict:
        document["metadata"].setdefault("labels", {})[key] = value
        return document

    return mutate


class TestGet:
    def test_missing(self, store) -> None:
        document, found = store.get("Ingress", "default", "nothing")

        assert found is False
        assert document is None

    def test_after_create(self, store) -> None:
        store.upsert("Ingress", "default", "web", _set_label("app", "web"))
        document, found = store.get("Ingress", "default", "web")

        assert found is True
        assert document["kind"] == "Ingress"
        assert document["metadata"]["name"] == "web"
        assert document["metadata"]["namespace"] == "default"
        assert document["metadata"]["labels"] == {"app": "web"}

    def test_identity_includes_namespace_and_kind(self, store) -> None:
        store.upsert("Ingress", "a", "web", _set_label("app", "web"))

        assert store.get("Ingress", "b", "web")[1] is False
        assert store.get("HTTPRoute", "a", "web")[1] is False


class TestUpsert:
    def test_create_assigns_uid(self, store) -> None:
        document, mutated = store.upsert("Gateway", "gateways", "public", _set_label("tier", "edge"))

        assert mutated is True
        assert document["metadata"]["uid"]

    def test_unchanged_is_noop(self, store) -> None:
        store.upsert("Ingress", "default", "web", _set_label("app", "web"))
        rv = store.get_resource_version("Ingress", "default", "web")

        _, mutated = store.upsert("Ingress", "default", "web", _set_label("app", "web"))

        assert mutated is False
        assert store.get_resource_version("Ingress", "default", "web") == rv

    def test_change_bumps_resource_version(self, store) -> None:
        store.upsert("Ingress", "default", "web", _set_label("app", "web"))
        _, mutated = store.upsert("Ingress", "default", "web", _set_label("app", "api"))

        assert mutated is True
        assert store.get_resource_version("Ingress", "default", "web") == 2
        assert store.get("Ingress", "default", "web")[0]["metadata"]["labels"] == {"app": "api"}

    def test_uid_is_stable(self, store) -> None:
        first, _ = store.upsert("Ingress", "default", "web", _set_label("app", "web"))
        second, _ = store.upsert("Ingress", "default", "web", _set_label("app", "api"))

        assert first["metadata"]["uid"] == second["metadata"]["uid"]

    def test_identity_cannot_be_rewritten(self, store) -> None:
        def rename(document: dict) -> dict:
            document["kind"] = "Service"
            document["metadata"]["name"] = "other"
            return document

        document, _ = store.upsert("Ingress", "default", "web", rename)

        assert document["kind"] == "Ingress"
        assert document["metadata"]["name"] == "web"
        assert store.get("Ingress", "default", "other")[1] is False

    def test_single_row_per_identity(self, store) -> None:
        for value in ("a", "b", "c"):
            store.upsert("Ingress", "default", "web", _set_label("app", value))

        assert len(store.list("Ingress")) == 1

    def test_lost_create_race_retries_as_update(self, session_factory, store) -> None:
        store.upsert("Ingress", "default", "web", _set_label("app", "web"))
        uid = store.get("Ingress", "default", "web")[0]["metadata"]["uid"]

        class StaleFirstRead(SQLObjectStore):
            # First lookup misses as if a concurrent writer created the row meanwhile
            stale_reads = 1

            def _find(self, db, kind, namespace, name, for_update=False):
                if self.stale_reads:
                    self.stale_reads -= 1
                    return None
                return super()._find(db, kind, namespace, name, for_update)

        document, mutated = StaleFirstRead(session_factory).upsert(
            "Ingress", "default", "web", _set_label("app", "api")
        )

        assert mutated is True
        assert document["metadata"]["labels"] == {"app": "api"}
        assert document["metadata"]["uid"] == uid
        assert len(store.list("Ingress")) == 1
        assert store.get_resource_version("Ingress", "default", "web") == 2

    def test_mutator_error_leaves_object(self, store) -> None:
        store.upsert("Ingress", "default", "web", _set_label("app", "web"))
        before = store.get("Ingress", "default", "web")[0]

        def explode(document: dict) -> dict:
            document["metadata"]["labels"]["app"] = "half-written"
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            store.upsert("Ingress", "default", "web", explode)

        assert store.get("Ingress", "default", "web")[0] == before

    def test_mutator_receives_copy(self, store) -> None:
        store.upsert("Ingress", "default", "web", _set_label("app", "web"))
        seen = []

        def capture(document: dict) -> dict:
            seen.append(document)
            return {**document, "spec": {"x": 1}}

        store.upsert("Ingress", "default", "web", capture)
        assert "spec" not in seen[0]


class TestDeadline:
    def test_expired_deadline_fails_get(self, store) -> None:
        with pytest.raises(StoreError, match="Deadline"):
            store.get("Ingress", "default", "web", deadline=Deadline(0))

    def test_expired_deadline_fails_upsert(self, store) -> None:
        with pytest.raises(StoreError, match="Deadline"):
            store.upsert("Ingress", "default", "web", _set_label("a", "b"), deadline=Deadline(0))

        assert store.get("Ingress", "default", "web")[1] is False

    def test_remaining_budget(self) -> None:
        deadline = Deadline(60)
        assert deadline.expired is False
        assert 0 < deadline.remaining <= 60


class TestBackendFailures:
    @pytest.fixture
    def broken_store(self):
        # Tables never created: every query fails
        engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
        yield SQLObjectStore(sessionmaker(bind=engine))
        engine.dispose()

    def test_get_wraps_errors(self, broken_store) -> None:
        with pytest.raises(StoreError):
            broken_store.get("Ingress", "default", "web")

    def test_upsert_wraps_errors(self, broken_store) -> None:
        with pytest.raises(StoreError):
            broken_store.upsert("Ingress", "default", "web", _set_label("a", "b"))


class TestListAndDelete:
    def test_list_by_namespace(self, store) -> None:
        store.upsert("Ingress", "a", "one", _set_label("x", "1"))
        store.upsert("Ingress", "b", "two", _set_label("x", "2"))
        store.upsert("Gateway", "a", "gw", _set_label("x", "3"))

        assert [d["metadata"]["name"] for d in store.list("Ingress")] == ["one", "two"]
        assert [d["metadata"]["name"] for d in store.list("Ingress", "b")] == ["two"]

    def test_delete(self, store) -> None:
        store.upsert("Ingress", "a", "one", _set_label("x", "1"))

        assert store.delete("Ingress", "a", "one") is True
        assert store.delete("Ingress", "a", "one") is False
        assert store.get("Ingress", "a", "one")[1] is False


class TestRowLocking:
    def _sql(self, session_factory, for_update: bool) -> str:
        db = session_factory()
        try:
            query = SQLObjectStore._query(db, "Ingress", "default", "web", for_update=for_update)
            return str(query.statement.compile(dialect=postgresql.dialect()))
        finally:
            db.close()

    def test_reads_do_not_lock(self, session_factory) -> None:
        assert "FOR UPDATE" not in self._sql(session_factory, for_update=False)

    def test_writes_lock(self, session_factory) -> None:
        assert "FOR UPDATE" in self._sql(session_factory, for_update=True)


def test_canonical_json_is_key_order_independent() -> None:
    assert canonical_json({"b": 1, "a": {"d": 2, "c": 3}}) == canonical_json({"a": {"c": 3, "d": 2}, "b": 1})
