"""Integration tests for the event CRUD endpoints."""

from tests.api.helpers import create_category_via_api, create_event_via_api


class TestCreateEvent:
    """Tests for POST /events."""

    def test_create_single_event(self, client_with_service):
        """Test that a single event is created with defaults filled in."""
        client, service = client_with_service

        data = create_event_via_api(client, location="Room 4")

        assert data["title"] == "Team Meeting"
        assert data["location"] == "Room 4"
        assert data["color"] == "#4285f4"
        assert data["is_recurring"] is False
        assert data["recurrence"] is None
        assert data["id"] in service.events

    def test_create_recurring_event(self, client_with_service):
        """Test that a recurrence rule makes the event recurring."""
        client, _ = client_with_service

        data = create_event_via_api(
            client, recurrence={"frequency": "weekly", "days_of_week": [5, 1]}
        )

        assert data["is_recurring"] is True
        assert data["recurrence"]["frequency"] == "weekly"
        assert data["recurrence"]["days_of_week"] == [1, 5]

    def test_invalid_rule_returns_422(self, client_with_service):
        """Test that an invalid rule is rejected with structured errors."""
        client, service = client_with_service

        response = client.post(
            "/events",
            json={
                "title": "Bad",
                "start_date": "2024-01-01T09:00:00",
                "recurrence": {"frequency": "daily", "day_of_month": 3},
            },
        )

        assert response.status_code == 422
        body = response.json()
        assert body["type"] == "InvalidRuleError"
        assert body["validation_errors"]
        assert len(service.events) == 0

    def test_end_before_start_returns_422(self, client_with_service):
        client, _ = client_with_service

        response = client.post(
            "/events",
            json={
                "title": "Backwards",
                "start_date": "2024-01-01T10:00:00",
                "end_date": "2024-01-01T09:00:00",
            },
        )

        assert response.status_code == 422
        assert response.json()["error"] == "Validation Error"

    def test_missing_title_returns_422(self, client_with_service):
        client, _ = client_with_service

        response = client.post("/events", json={"start_date": "2024-01-01T09:00:00"})

        assert response.status_code == 422

    def test_unknown_category_returns_404(self, client_with_service):
        client, _ = client_with_service

        response = client.post(
            "/events",
            json={
                "title": "Filed",
                "start_date": "2024-01-01T09:00:00",
                "category_id": "nope",
            },
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Category Not Found"
        assert response.json()["record_id"] == "nope"


class TestReadEvents:
    """Tests for GET /events and related lookups."""

    def test_get_event(self, client_with_service):
        client, _ = client_with_service
        created = create_event_via_api(client)

        response = client.get(f"/events/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_missing_event(self, client_with_service):
        client, _ = client_with_service

        response = client.get("/events/does-not-exist")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Event Not Found"
        assert body["type"] == "EventNotFoundError"

    def test_list_in_window(self, client_with_service):
        """Test that the window filters single events by start date."""
        client, _ = client_with_service
        create_event_via_api(client, title="January")
        create_event_via_api(
            client,
            title="March",
            start_date="2024-03-01T09:00:00",
            end_date="2024-03-01T10:00:00",
        )

        response = client.get(
            "/events", params={"start_date": "2024-01-01", "end_date": "2024-01-31"}
        )

        assert response.status_code == 200
        body = response.json()
        assert [e["title"] for e in body["events"]] == ["January"]
        assert body["instances"] == []
        assert body["count"] == 1

    def test_list_expands_recurring(self, client_with_service):
        """Test that expand_recurring returns instances instead of the series."""
        client, _ = client_with_service
        series = create_event_via_api(
            client, title="Standup", recurrence={"frequency": "daily"}
        )
        create_event_via_api(
            client,
            title="Lunch",
            start_date="2024-01-02T12:00:00",
            end_date="2024-01-02T13:00:00",
        )

        response = client.get(
            "/events",
            params={
                "start_date": "2024-01-01",
                "end_date": "2024-01-03",
                "expand_recurring": True,
            },
        )

        body = response.json()
        assert [e["title"] for e in body["events"]] == ["Lunch"]
        assert [i["id"] for i in body["instances"]] == [
            f"{series['id']}-2024-01-01",
            f"{series['id']}-2024-01-02",
            f"{series['id']}-2024-01-03",
        ]
        assert body["count"] == 4

    def test_list_without_recurring(self, client_with_service):
        client, _ = client_with_service
        create_event_via_api(client, title="Standup", recurrence={"frequency": "daily"})
        create_event_via_api(client, title="Once")

        response = client.get("/events", params={"include_recurring": False})

        assert [e["title"] for e in response.json()["events"]] == ["Once"]

    def test_list_by_categories(self, client_with_service):
        client, _ = client_with_service
        work = create_category_via_api(client)
        create_event_via_api(client, title="Filed", category_id=work["id"])
        create_event_via_api(client, title="Loose")

        response = client.get("/events", params={"category_ids": [work["id"]]})
        by_category = client.get(f"/events/category/{work['id']}")

        assert [e["title"] for e in response.json()["events"]] == ["Filed"]
        assert by_category.json()["count"] == 1

    def test_list_invalid_window(self, client_with_service):
        client, _ = client_with_service

        response = client.get(
            "/events", params={"start_date": "2024-02-01", "end_date": "2024-01-01"}
        )

        assert response.status_code == 400
        assert response.json()["type"] == "InvalidWindowError"

    def test_search(self, client_with_service):
        client, _ = client_with_service
        create_event_via_api(client, title="Quarterly Planning")
        create_event_via_api(client, title="Lunch")

        response = client.get("/events/search", params={"q": "planning"})

        assert response.status_code == 200
        assert [e["title"] for e in response.json()["items"]] == ["Quarterly Planning"]

    def test_search_blank_query(self, client_with_service):
        client, _ = client_with_service

        response = client.get("/events/search", params={"q": "  "})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid Value"


class TestUpdateAndDelete:
    """Tests for PATCH and DELETE /events/{id}."""

    def test_patch_changes_only_sent_fields(self, client_with_service):
        client, _ = client_with_service
        created = create_event_via_api(client, location="Room 4")

        response = client.patch(f"/events/{created['id']}", json={"title": "Renamed"})

        assert response.status_code == 200
        assert response.json()["title"] == "Renamed"
        assert response.json()["location"] == "Room 4"

    def test_patch_removes_recurrence(self, client_with_service):
        client, _ = client_with_service
        created = create_event_via_api(client, recurrence={"frequency": "daily"})
        client.post(f"/events/{created['id']}/exclude", json={"date": "2024-01-02"})

        response = client.patch(f"/events/{created['id']}", json={"recurrence": None})

        body = response.json()
        assert body["is_recurring"] is False
        assert body["recurrence"] is None
        assert body["excluded_dates"] == ["2024-01-02"]

    def test_patch_cannot_clear_exclusions(self, client_with_service):
        """Test that excluded dates in a PATCH body are not applied."""
        client, service = client_with_service
        created = create_event_via_api(client, recurrence={"frequency": "daily"})
        client.post(f"/events/{created['id']}/exclude", json={"date": "2024-01-03"})

        response = client.patch(
            f"/events/{created['id']}", json={"title": "Daily", "excluded_dates": []}
        )

        assert response.status_code == 200
        assert response.json()["excluded_dates"] == ["2024-01-03"]
        assert service.get_event(created["id"]).excluded_dates == ["2024-01-03"]

    def test_patch_invalid_color(self, client_with_service):
        client, _ = client_with_service
        created = create_event_via_api(client)

        response = client.patch(f"/events/{created['id']}", json={"color": "blue"})

        assert response.status_code == 422

    def test_patch_missing(self, client_with_service):
        client, _ = client_with_service

        response = client.patch("/events/missing", json={"title": "x"})

        assert response.status_code == 404

    def test_delete(self, client_with_service):
        client, service = client_with_service
        created = create_event_via_api(client)

        response = client.delete(f"/events/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {
            "id": created["id"],
            "deleted": True,
            "message": "Deleted event: Team Meeting",
        }
        assert len(service.events) == 0
        assert client.delete(f"/events/{created['id']}").status_code == 404
