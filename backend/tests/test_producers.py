"""Tests for producer registration."""

from datetime import datetime, timezone

from sqlalchemy import func, select

from webhook_monitor.db.models import Producer
from webhook_monitor.services import producer_registry
from webhook_monitor.services.producer_registry import register_producer


def producer_count(db_session):
    return db_session.scalar(select(func.count(Producer.id)))


class TestRegisterProducer:
    """Test cases for the registry service."""

    def test_creates_new_producer(self, db_session):
        producer, created = register_producer(db_session, "http://a.com")

        assert created is True
        assert producer.id is not None
        assert producer.url == "http://a.com"
        assert producer.last_accessed is not None

    def test_repeat_registration_is_idempotent(self, db_session):
        first, _ = register_producer(db_session, "http://a.com")
        second, created = register_producer(db_session, "http://a.com")

        assert created is False
        assert second.id == first.id
        assert producer_count(db_session) == 1

    def test_lookup_is_case_insensitive(self, db_session):
        first, _ = register_producer(db_session, "http://a.com")
        second, created = register_producer(db_session, "HTTP://A.COM")

        assert created is False
        assert second.id == first.id
        assert second.url == "http://a.com"
        assert producer_count(db_session) == 1

    def test_non_ascii_url_is_idempotent(self, db_session):
        first, _ = register_producer(db_session, "http://ÄBC.example")
        second, created = register_producer(db_session, "http://ÄBC.example")

        assert created is False
        assert second.id == first.id
        assert producer_count(db_session) == 1

    def test_repeat_registration_keeps_last_accessed(self, db_session):
        first, _ = register_producer(db_session, "http://a.com")
        original = first.last_accessed

        second, _ = register_producer(db_session, "http://a.com")

        assert second.last_accessed == original

    def test_concurrent_insert_returns_existing(self, db_session, monkeypatch):
        db_session.add(Producer(url="http://race.com", last_accessed=datetime.now(timezone.utc)))
        db_session.commit()

        real_find = producer_registry.find_producer_by_url
        calls = []

        def stale_then_real(db, url):
            # First lookup misses, as if another request inserted in between
            calls.append(url)
            if len(calls) == 1:
                return None
            return real_find(db, url)

        monkeypatch.setattr(producer_registry, "find_producer_by_url", stale_then_real)

        producer, created = register_producer(db_session, "HTTP://RACE.COM")

        assert created is False
        assert producer.url == "http://race.com"
        assert producer_count(db_session) == 1


class TestProducerEndpoints:
    """Test cases for /producer."""

    def test_register_returns_201(self, client):
        response = client.post("/producer", json={"url": "http://x"})

        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["url"] == "http://x"
        assert "lastAccessed" in data

    def test_register_existing_returns_200(self, client):
        first = client.post("/producer", json={"url": "http://a.com"}).json()

        response = client.post("/producer", json={"url": "HTTP://A.COM"})

        assert response.status_code == 200
        assert response.json() == first

    def test_missing_url_returns_400(self, client, db_session):
        response = client.post("/producer", json={})

        assert response.status_code == 400
        assert producer_count(db_session) == 0

    def test_register_non_ascii_url_twice(self, client):
        first = client.post("/producer", json={"url": "http://ÄBC.example"})
        second = client.post("/producer", json={"url": "http://ÄBC.example"})

        assert first.status_code == 201
        assert second.status_code == 200
        assert second.json()["id"] == first.json()["id"]

    def test_blank_url_returns_400(self, client):
        response = client.post("/producer", json={"url": "   "})

        assert response.status_code == 400

    def test_malformed_json_returns_400(self, client):
        response = client.post(
            "/producer",
            content=b'{"url": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400

    def test_list_and_get(self, client):
        created = client.post("/producer", json={"url": "http://a.com"}).json()
        client.post("/producer", json={"url": "http://b.com"})

        listing = client.get("/producer")
        single = client.get(f"/producer/{created['id']}")

        assert listing.status_code == 200
        assert [p["url"] for p in listing.json()] == ["http://a.com", "http://b.com"]
        assert single.status_code == 200
        assert single.json() == created

    def test_get_unknown_returns_404(self, client):
        response = client.get("/producer/999")

        assert response.status_code == 404
