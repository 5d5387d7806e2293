from task_gateway.errors import PersistenceFailure
from task_gateway.services import ingestor

EMPTY_COUNTS = {"NEW": 0, "IN_PROGRESS": 0, "DONE": 0, "BLOCKED": 0}


def test_ingest_then_summary(client):
    resp = client.post(
        "/api/tasks/batch",
        json=[{"title": "A", "status": "NEW"}, {"title": "B", "status": "DONE"}],
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["insertedCount"] == 2
    inserted_at = body["insertedAt"]

    resp = client.get("/api/tasks/summary")
    assert resp.status_code == 200
    assert resp.json() == {
        "total": 2,
        "byStatus": {"NEW": 1, "IN_PROGRESS": 0, "DONE": 1, "BLOCKED": 0},
        "latestInsertedAt": inserted_at,
    }


def test_summary_on_empty_store(client):
    resp = client.get("/api/tasks/summary")
    assert resp.json() == {"total": 0, "byStatus": EMPTY_COUNTS, "latestInsertedAt": None}


def test_empty_title_rejected_without_writes(client):
    client.post("/api/tasks/batch", json=[{"title": "keep"}])
    before = client.get("/api/tasks/summary").json()

    resp = client.post("/api/tasks/batch", json=[{"title": "", "status": "NEW"}])
    assert resp.status_code == 422
    body = resp.json()
    assert body["errorKind"] == "InvalidTitle"
    assert body["index"] == 0
    assert body["retryable"] is False

    assert client.get("/api/tasks/summary").json() == before


def test_unknown_status_rejected(client):
    resp = client.post("/api/tasks/batch", json=[{"title": "X", "status": "MAYBE"}])
    assert resp.status_code == 422
    body = resp.json()
    assert body["errorKind"] == "InvalidStatus"
    assert body["index"] == 0
    assert "MAYBE" in body["detail"]


def test_invalid_record_late_in_batch_rejects_everything(client):
    records = [{"title": f"t{i}"} for i in range(10)]
    records.append({"title": "bad", "dueDate": "not a date"})
    resp = client.post("/api/tasks/batch", json=records)

    assert resp.status_code == 422
    assert resp.json()["errorKind"] == "InvalidDueDate"
    assert resp.json()["index"] == 10
    assert client.get("/api/tasks/summary").json()["total"] == 0


def test_empty_batch_rejected(client):
    resp = client.post("/api/tasks/batch", json=[])
    assert resp.status_code == 422
    assert resp.json()["errorKind"] == "EmptyBatch"


def test_batch_size_boundary(client):
    resp = client.post("/api/tasks/batch", json=[{"title": f"t{i}"} for i in range(501)])
    assert resp.status_code == 422
    assert resp.json()["errorKind"] == "BatchTooLarge"
    assert client.get("/api/tasks/summary").json()["total"] == 0

    resp = client.post("/api/tasks/batch", json=[{"title": f"t{i}"} for i in range(500)])
    assert resp.status_code == 201
    assert resp.json()["insertedCount"] == 500

    summary = client.get("/api/tasks/summary").json()
    assert summary["total"] == 500
    assert summary["byStatus"]["NEW"] == 500
    assert sum(summary["byStatus"].values()) == summary["total"]


def test_out_of_range_priority_flagged(client):
    resp = client.post("/api/tasks/batch", json=[{"title": "A", "priority": 8}])
    assert resp.status_code == 201
    warnings = resp.json()["warnings"]
    assert len(warnings) == 1
    assert warnings[0]["index"] == 0
    assert warnings[0]["field"] == "priority"


def test_non_list_body_rejected(client):
    resp = client.post("/api/tasks/batch", json={"title": "A"})
    assert resp.status_code == 422
    assert client.get("/api/tasks/summary").json()["total"] == 0


def test_persistence_failure_is_retryable(client, monkeypatch):
    def fail(tasks):
        raise PersistenceFailure("failed to persist batch: database is locked")

    monkeypatch.setattr(ingestor, "insert_batch", fail)
    resp = client.post("/api/tasks/batch", json=[{"title": "A"}])

    assert resp.status_code == 503
    body = resp.json()
    assert body["errorKind"] == "PersistenceFailure"
    assert body["retryable"] is True


def test_list_and_get_tasks(client):
    client.post(
        "/api/tasks/batch",
        json=[
            {"title": "A", "status": "DONE", "dueDate": "2026-11-01T00:00:00Z"},
            {"title": "B"},
        ],
    )

    resp = client.get("/api/tasks")
    assert resp.status_code == 200
    assert resp.json()["count"] == 2

    resp = client.get("/api/tasks", params={"status": "DONE"})
    (task,) = resp.json()["tasks"]
    assert task["title"] == "A"
    assert task["createdAt"] == task["updatedAt"]
    assert task["dueDate"] is not None

    resp = client.get(f"/api/tasks/{task['id']}")
    assert resp.status_code == 200
    assert resp.json()["id"] == task["id"]


def test_missing_task_returns_404(client):
    assert client.get("/api/tasks/nope").status_code == 404


def test_request_id_header_and_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert len(resp.headers["X-Request-ID"]) == 26


def test_huge_priority_rejected_without_writes(client):
    resp = client.post("/api/tasks/batch", json=[{"title": "A", "priority": 10**30}])
    assert resp.status_code == 422
    assert resp.json()["errorKind"] == "InvalidPriority"
    assert resp.json()["index"] == 0
    assert client.get("/api/tasks/summary").json()["total"] == 0


def test_due_date_overflowing_utc_rejected(client):
    resp = client.post(
        "/api/tasks/batch",
        json=[{"title": "A"}, {"title": "B", "dueDate": "0001-01-01T00:00:00+05:00"}],
    )
    assert resp.status_code == 422
    assert resp.json()["errorKind"] == "InvalidDueDate"
    assert resp.json()["index"] == 1
    assert client.get("/api/tasks/summary").json()["total"] == 0


def test_caller_request_id_echoed(client):
    resp = client.get("/health", headers={"X-Request-ID": "batch-42"})
    assert resp.headers["X-Request-ID"] == "batch-42"
