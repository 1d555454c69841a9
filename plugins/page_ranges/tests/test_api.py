import time

from app import create_app


def _client():
    app = create_app("TestingConfig")
    return app.test_client()


def test_parse_endpoint_returns_pages_and_indices():
    client = _client()
    response = client.post(
        "/api/page_ranges/parse", json={"spec": "1-3,5,7-8", "page_count": 10}
    )
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    data = payload["data"]
    assert data["pages"] == [1, 2, 3, 5, 7, 8]
    assert data["indices"] == [0, 1, 2, 4, 6, 7]
    assert data["count"] == 6
    assert data["page_count"] == 10
    assert data["ignored"] == []


def test_parse_endpoint_reports_ignored_segments():
    client = _client()
    response = client.post(
        "/api/page_ranges/parse", json={"spec": "a,1-b,4", "page_count": 10}
    )
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["pages"] == [1, 4]
    assert data["ignored"] == ["a"]


def test_parse_endpoint_applies_blank_default():
    client = _client()
    response = client.post(
        "/api/page_ranges/parse", json={"spec": "", "page_count": 3, "default": "all"}
    )
    assert response.status_code == 200
    assert response.get_json()["data"]["pages"] == [1, 2, 3]


def test_parse_endpoint_requires_pages_when_asked():
    client = _client()
    response = client.post(
        "/api/page_ranges/parse",
        json={"spec": "0,12", "page_count": 5, "require": True},
    )
    assert response.status_code == 422
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "page_ranges.no_valid_pages"
    assert payload["error"]["details"]["ignored"] == ["0", "12"]


def test_parse_endpoint_rejects_invalid_payload():
    client = _client()
    for body in (
        {"spec": "1-3"},
        {"spec": "1-3", "page_count": -1},
        {"spec": "1-3", "page_count": 3, "unexpected": True},
        {"spec": "1", "page_count": 3, "default": "first"},
    ):
        response = client.post("/api/page_ranges/parse", json=body)
        assert response.status_code == 400
        payload = response.get_json()
        assert payload["success"] is False
        assert payload["error"]["code"] == "page_ranges.invalid_request"


def test_parse_endpoint_enforces_limits():
    client = _client()
    response = client.post(
        "/api/page_ranges/parse", json={"spec": "1," * 1001, "page_count": 5}
    )
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "page_ranges.spec_too_long"

    response = client.post(
        "/api/page_ranges/parse", json={"spec": "1", "page_count": 10001}
    )
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "page_ranges.page_count_exceeded"


def test_parse_endpoint_limits_follow_plugin_settings():
    app = create_app("TestingConfig")
    app.config["PLUGIN_SETTINGS"] = {"page_ranges": {"max_page_count": 3}}
    client = app.test_client()
    response = client.post("/api/page_ranges/parse", json={"spec": "1", "page_count": 4})
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "page_ranges.page_count_exceeded"


def test_parse_endpoint_only_accepts_post():
    client = _client()
    response = client.get("/api/page_ranges/parse")
    assert response.status_code == 405
    assert response.get_json()["success"] is False


def test_plan_endpoint_resolves_named_ranges():
    client = _client()
    response = client.post(
        "/api/page_ranges/plan",
        json={
            "page_count": 5,
            "plan": [
                {"name": "first.pdf", "pages": "1-2"},
                {"name": "rest.pdf", "pages": "3-"},
            ],
        },
    )
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["page_count"] == 5
    assert [item["name"] for item in data["items"]] == ["first.pdf", "rest.pdf"]
    assert data["items"][0]["pages"] == [1, 2]
    assert data["items"][1]["indices"] == [2, 3, 4]


def test_plan_endpoint_rejects_duplicate_names():
    client = _client()
    response = client.post(
        "/api/page_ranges/plan",
        json={
            "page_count": 5,
            "plan": [{"name": "A.pdf", "pages": "1"}, {"name": "a.pdf", "pages": "2"}],
        },
    )
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "page_ranges.duplicate_name"


def test_plan_endpoint_rejects_empty_items():
    client = _client()
    response = client.post(
        "/api/page_ranges/plan",
        json={"page_count": 2, "plan": [{"name": "bad.pdf", "pages": "3-4"}]},
    )
    assert response.status_code == 422
    error = response.get_json()["error"]
    assert error["code"] == "page_ranges.no_valid_pages"
    assert error["details"]["name"] == "bad.pdf"


def test_plan_endpoint_validates_shape():
    client = _client()
    response = client.post("/api/page_ranges/plan", json={"page_count": 2, "plan": []})
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "page_ranges.invalid_request"

    plan = [{"name": f"part-{idx}.pdf", "pages": "1"} for idx in range(51)]
    response = client.post("/api/page_ranges/plan", json={"page_count": 2, "plan": plan})
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "page_ranges.plan_too_large"


def test_plan_endpoint_caps_total_selected_pages():
    client = _client()
    spec = ",".join(["1-"] * 600)
    plan = [{"name": f"part-{idx}.pdf", "pages": spec} for idx in range(50)]
    started = time.perf_counter()
    response = client.post(
        "/api/page_ranges/plan", json={"page_count": 10000, "plan": plan}
    )
    elapsed = time.perf_counter() - started
    assert response.status_code == 400
    error = response.get_json()["error"]
    assert error["code"] == "page_ranges.plan_too_large"
    assert error["details"]["max_plan_pages"] == 100000
    assert elapsed < 5


def test_plan_endpoint_resolves_repeated_ranges_within_cap():
    client = _client()
    spec = ",".join(["1-"] * 600)
    plan = [{"name": f"part-{idx}.pdf", "pages": spec} for idx in range(5)]
    response = client.post(
        "/api/page_ranges/plan", json={"page_count": 10000, "plan": plan}
    )
    assert response.status_code == 200
    items = response.get_json()["data"]["items"]
    assert [item["count"] for item in items] == [10000] * 5
