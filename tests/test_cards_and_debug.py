def test_memory_card_catalog(client):
    categories = client.get("/api/memory-cards").json()
    names = [c["name"] for c in categories]
    assert "Fractions" in names and "Word Problems" in names
    card = categories[0]["cards"][0]
    assert set(card) == {"front", "back"}
    assert card["front"]["title"] and card["back"]["content"]


def test_memory_card_category_lookup_ignores_case(client):
    resp = client.get("/api/memory-cards/fractions")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Fractions"

    missing = client.get("/api/memory-cards/astronomy")
    assert missing.status_code == 404
    assert missing.json()["message"] == "No memory cards for 'astronomy'"


def test_db_diagnostics_reports_the_backend(client):
    info = client.get("/debug/diagnostics/db").json()
    assert info["backend"] == "sqlite"
    assert "sqlite_path" in info
    assert info["missing_tables"] == []


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
