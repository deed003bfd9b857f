"""
Portal form pages: submit, validation, failure and device scoping.
"""

import re

from fastapi.testclient import TestClient

from main import app
from portal.core.config import settings


DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def design_form(**overrides):
    form = {
        "storeNumber": "1234",
        "storeName": "Yogurtland - Downtown LA",
        "contactName": "Dana Lee",
        "email": "dana@example.com",
        "phone": "",
        "requestType": "Banner",
        "description": "Grand reopening banner",
        "neededByDate": "",
        "fileName": "logo.ai",
    }
    form.update(overrides)
    return form


def store_hours_form(change_type="new_hours", **overrides):
    form = {
        "storeName": "Yogurtland - Downtown LA",
        "managerName": "Sam Ortiz",
        "managerEmail": "sam@example.com",
        "changeType": change_type,
    }
    for day in DAYS:
        form[f"hours-{day}-start"] = "10:00"
        form[f"hours-{day}-end"] = "22:00"
    form.update(overrides)
    return form


def list_count(client, slug):
    return len(client.get(f"/api/{slug}").json())


class TestSuccessfulSubmission:

    def test_appends_one_record_and_redirects_to_list(self, client, webhook):
        response = client.post("/design-requests/new", data=design_form(), follow_redirects=False)

        assert response.status_code == 303
        assert re.fullmatch(r"/design-requests\?submitted=REQ-\d{6}", response.headers["location"])
        assert len(webhook.requests) == 1

        records = client.get("/api/design-requests").json()
        assert len(records) == 1
        record = records[0]
        assert record["status"] == "Pending"
        assert record["contactName"] == "Dana Lee"
        assert record["fileName"] == "logo.ai"
        assert re.fullmatch(r"\d{1,2}/\d{1,2}/\d{4}", record["eta"])

    def test_list_and_detail_pages_show_record(self, client):
        client.post("/design-requests/new", data=design_form())
        record_id = client.get("/api/design-requests").json()[0]["id"]

        listing = client.get("/design-requests")
        assert listing.status_code == 200
        assert record_id in listing.text
        assert "Grand reopening banner" in listing.text

        detail = client.get(f"/design-requests/{record_id}")
        assert detail.status_code == 200
        assert "Dana Lee" in detail.text
        assert "logo.ai" in detail.text

    def test_records_keep_submission_order(self, client):
        client.post("/design-requests/new", data=design_form(description="First"))
        client.post("/design-requests/new", data=design_form(description="Second"))

        descriptions = [r["description"] for r in client.get("/api/design-requests").json()]
        assert descriptions == ["First", "Second"]

    def test_store_hours_submission(self, client, webhook):
        response = client.post("/store-hours-changes/new", data=store_hours_form(), follow_redirects=False)

        assert response.status_code == 303
        assert webhook.payloads[0]["Sat_End"] == "22:00"
        record = client.get("/api/store-hours-changes").json()[0]
        assert re.fullmatch(r"SHC-\d{6}", record["id"])
        assert len(record["hours"]) == 7

    def test_lsm_checkboxes(self, client, webhook):
        form = {
            "storeLocation": "Yogurtland - Downtown LA, Yogurtland - Irvine",
            "contactName": "Dana Lee",
            "contactEmail": "dana@example.com",
            "lsmTypes": ["Web Ad", "Billboard"],
            "desiredMessage": "Now open late",
            "fileType": ["PNG"],
        }
        response = client.post("/lsm-requests/new", data=form, follow_redirects=False)

        assert response.status_code == 303
        payload = webhook.payloads[0]
        assert payload["lsmTypes"] == ["Web Ad", "Billboard"]
        assert payload["storeLocation"] == ["Yogurtland - Downtown LA", "Yogurtland - Irvine"]
        assert list_count(client, "lsm-requests") == 1


class TestValidation:

    def test_blank_required_fields_block_submission(self, client, webhook):
        response = client.post(
            "/design-requests/new",
            data=design_form(contactName="", email="", requestType="", description=""),
        )

        assert response.status_code == 422
        assert "Contact name is required" in response.text
        assert "Email is required" in response.text
        assert "Request type is required" in response.text
        assert "Description is required" in response.text
        assert webhook.requests == []
        assert list_count(client, "design-requests") == 0

    def test_invalid_email_shown_inline(self, client, webhook):
        response = client.post("/design-requests/new", data=design_form(email="dana.example.com"))

        assert response.status_code == 422
        assert "Invalid email address" in response.text
        assert webhook.requests == []

    def test_temporary_close_needs_date_and_note(self, client, webhook):
        response = client.post("/store-hours-changes/new", data=store_hours_form("temporary_close"))

        assert response.status_code == 422
        assert "Close date is required" in response.text
        assert "Reason is required" in response.text
        assert webhook.requests == []

    def test_holiday_hours_needs_one_row(self, client):
        response = client.post("/store-hours-changes/new", data=store_hours_form("holiday_hours"))

        assert response.status_code == 422
        assert "At least one holiday date and name is required" in response.text

    def test_new_hours_end_after_start(self, client):
        form = store_hours_form(**{"hours-Tuesday-end": "09:00"})

        response = client.post("/store-hours-changes/new", data=form)

        assert response.status_code == 422
        assert "End time must be after start time for Tuesday" in response.text

    def test_form_stays_populated(self, client):
        response = client.post("/price-changes/new", data={"managerName": "Sam Ortiz"})

        assert response.status_code == 422
        assert 'value="Sam Ortiz"' in response.text


class TestFailedSubmission:

    def test_webhook_failure_leaves_list_unchanged(self, client, webhook):
        webhook.status_code = 500

        response = client.post("/design-requests/new", data=design_form())

        assert response.status_code == 500
        assert "Failed to submit to SharePoint" in response.text
        assert "alert(" in response.text
        assert 'value="Dana Lee"' in response.text
        assert list_count(client, "design-requests") == 0

    def test_missing_flow_url(self, client, webhook, monkeypatch):
        monkeypatch.setattr(settings, "POWER_AUTOMATE_STORE_HOURS_URL", "")

        response = client.post("/store-hours-changes/new", data=store_hours_form())

        assert response.status_code == 500
        assert "Power Automate URL not configured" in response.text
        assert list_count(client, "store-hours-changes") == 0

    def test_network_failure(self, client, webhook):
        webhook.fail_with_network_error = True

        response = client.post("/design-requests/new", data=design_form())

        assert "Failed to submit request" in response.text
        assert list_count(client, "design-requests") == 0

    def test_malformed_flow_url_rerenders_form(self, client, monkeypatch):
        monkeypatch.setattr(settings, "POWER_AUTOMATE_DESIGN_REQUEST_URL", "https://[::1")

        response = client.post("/design-requests/new", data=design_form())

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/html")
        assert "Failed to submit request" in response.text
        assert 'value="Dana Lee"' in response.text
        assert list_count(client, "design-requests") == 0


class TestPages:

    def test_index_lists_request_kinds(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "Design Requests" in response.text
        assert "Store Hours Changes" in response.text
        assert "portal_device_id" in response.headers.get("set-cookie", "")

    def test_empty_list(self, client):
        response = client.get("/price-changes")

        assert response.status_code == 200
        assert "No requests yet" in response.text

    def test_new_design_form_prefills_home_store(self, client):
        response = client.get("/design-requests/new")

        assert response.status_code == 200
        assert f'value="{settings.STORE_NUMBER}"' in response.text

    def test_unknown_kind_is_404(self, client):
        assert client.get("/gift-cards").status_code == 404

    def test_unknown_record_is_404(self, client):
        assert client.get("/design-requests/REQ-000000").status_code == 404


def test_lists_are_scoped_per_device(client):
    client.post("/design-requests/new", data=design_form())
    assert list_count(client, "design-requests") == 1

    other_device = TestClient(app)
    assert len(other_device.get("/api/design-requests").json()) == 0
