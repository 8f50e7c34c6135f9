import pytest
from fastapi.testclient import TestClient


def test_health(client: TestClient):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_list_components_returns_numeric_prices(client: TestClient):
    resp = client.get("/api/components")

    assert resp.status_code == 200
    items = resp.json()
    assert len(items) == 13
    assert isinstance(items[0]["price"], float)


def test_list_components_filters(client: TestClient):
    cpus = client.get("/api/components", params={"type": "CPU"}).json()
    intel = client.get("/api/components", params={"type": "CPU", "q": "intel"}).json()

    assert len(cpus) == 3
    assert [c["name"] for c in intel] == ["Intel Core i9-14900K", "Intel Core i5-13400F"]
    assert client.get("/api/components", params={"type": "Monitor"}).status_code == 422


def test_component_crud(client: TestClient):
    payload = {
        "name": "Deepcool AK400",
        "type": "Cooler",
        "price": "450000",
        "image_url": "https://example.com/ak400.jpg",
        "specs": "Tower cooler, LGA1700/AM5",
        "marketplace_link": "",
    }
    created = client.post("/api/components", json=payload)
    assert created.status_code == 201
    component_id = created.json()["id"]
    assert created.json()["price"] == 450_000.0
    assert created.json()["marketplace_link"] is None

    payload["price"] = 475000
    updated = client.put(f"/api/components/{component_id}", json=payload)
    assert updated.status_code == 200
    assert updated.json()["price"] == 475_000.0

    assert client.delete(f"/api/components/{component_id}").status_code == 200
    assert client.get(f"/api/components/{component_id}").status_code == 404
    assert client.delete(f"/api/components/{component_id}").status_code == 404


def test_component_payload_validation(client: TestClient):
    bad = {
        "name": "X",
        "type": "CPU",
        "price": 500,
        "image_url": "not-a-url",
    }

    assert client.post("/api/components", json=bad).status_code == 422


def test_component_links(client: TestClient):
    body = client.get("/api/components/6/links").json()

    assert body["name"] == "AMD Radeon RX 7800 XT"
    assert body["price_label"] == "Rp 8.200.000"
    assert body["links"]["shopee"] == "https://shopee.co.id/search?keyword=rx%207800%20xt"
    assert body["links"]["tokopedia"].startswith("https://www.tokopedia.com/search?q=")


def test_monitors_with_preset(client: TestClient):
    all_monitors = client.get("/api/monitors").json()
    budget = client.get("/api/monitors", params={"preset": "budget"}).json()
    searched = client.get("/api/monitors", params={"q": "oled"}).json()

    assert len(all_monitors) == 5
    assert {m["title"] for m in budget} == {"ASUS TUF Gaming VG27AQ", "KOORUI 24E3"}
    assert {m["title"] for m in searched} == {"LG UltraGear 27GR95QE-B", "Samsung Odyssey G9 OLED"}


def test_allocation_endpoint(client: TestClient):
    body = client.get("/api/allocation", params={"budget": "10000000"}).json()

    assert body["CPU"] == 2_500_000
    assert body["Cooler"] == pytest.approx(300_000)
    assert client.get("/api/allocation", params={"budget": "0"}).status_code == 400
    assert client.get("/api/allocation", params={"budget": "abc"}).status_code == 400


def test_recommend_with_seed_catalog(client: TestClient):
    resp = client.post("/api/recommend", json={"budget": 27_200_000})

    assert resp.status_code == 200
    body = resp.json()
    build = body["build"]
    assert body["catalog_error"] is None
    assert build["cpu"]["name"] == "AMD Ryzen 7 7800X3D"
    assert build["gpu"]["name"] == "AMD Radeon RX 7800 XT"
    selected = [build[k] for k in ("cpu", "gpu", "ram", "motherboard", "storage", "psu", "case", "cooler")]
    assert build["total_price"] == sum(p["price"] for p in selected if p)


def test_recommend_with_filters(client: TestClient):
    build = client.post(
        "/api/recommend",
        json={"budget": 27_200_000, "platform": "intel", "gpu_vendor": "nvidia"},
    ).json()["build"]

    assert "intel" in build["cpu"]["name"].lower()
    assert build["gpu"]["name"] == "NVIDIA GeForce RTX 4070"
    assert build["motherboard"]["name"] == "ASUS ROG Strix Z790-E Gaming WIFI"


def test_recommend_rejects_invalid_budget(client: TestClient):
    assert client.post("/api/recommend", json={"budget": 0}).status_code == 422
    assert client.post("/api/recommend", json={"budget": -5}).status_code == 422
    assert client.post("/api/recommend", json={}).status_code == 422
    assert client.post("/api/recommend", json={"budget": 1, "platform": "arm"}).status_code == 422


def test_compatibility_endpoint(client: TestClient):
    mismatch = client.post("/api/compatibility", json={"cpu_id": 2, "motherboard_id": 8}).json()
    same = client.post("/api/compatibility", json={"cpu_id": 3, "motherboard_id": 8}).json()
    partial = client.post("/api/compatibility", json={"cpu_id": 2}).json()

    assert mismatch["issues"] == ["Socket mismatch: CPU (AM5) vs Motherboard (LGA1700)"]
    assert same["issues"] == []
    assert partial["issues"] == []
    assert client.post("/api/compatibility", json={"cpu_id": 999}).status_code == 404


def test_manual_build(client: TestClient):
    resp = client.post(
        "/api/builds/manual",
        json={"selection": {"CPU": 2, "Motherboard": 9, "GPU": 5, "RAM": None}},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["issues"] == []
    assert body["total_price"] == 6_800_000 + 3_600_000 + 9_500_000
    assert body["selection"]["RAM"] is None
    assert body["selection"]["Cooler"] is None


def test_manual_build_rejects_wrong_category(client: TestClient):
    resp = client.post("/api/builds/manual", json={"selection": {"GPU": 2}})

    assert resp.status_code == 400


def test_catalog_unavailable_on_list(client: TestClient, db_path):
    db_path.unlink()

    assert client.get("/api/components").status_code == 503
    assert client.get("/api/monitors").status_code == 503
    recommend = client.post("/api/recommend", json={"budget": 15_000_000}).json()
    assert recommend["build"]["total_price"] == 0
    assert recommend["catalog_error"] is not None


@pytest.mark.parametrize("price", ["Infinity", "NaN", "1e400"])
def test_component_rejects_non_finite_price(client: TestClient, price):
    payload = {
        "name": "Broken GPU",
        "type": "GPU",
        "price": price,
        "image_url": "https://example.com/gpu.png",
    }

    assert client.post("/api/components", json=payload).status_code == 422
    assert client.put("/api/components/5", json=payload).status_code == 422
    listed = client.get("/api/components")
    assert listed.status_code == 200
    assert len(listed.json()) == 13


def test_component_rejects_overflowing_json_number(client: TestClient):
    raw = '{"name": "Broken GPU", "type": "GPU", "price": 1e400, "image_url": "https://example.com/gpu.png"}'

    resp = client.post("/api/components", content=raw, headers={"content-type": "application/json"})

    assert resp.status_code == 422
    assert len(client.get("/api/components").json()) == 13


def test_recommend_rejects_overflowing_budget(client: TestClient):
    resp = client.post("/api/recommend", content='{"budget": 1e400}', headers={"content-type": "application/json"})

    assert resp.status_code == 422


def test_compatibility_rejects_ids_of_wrong_category(client: TestClient):
    board_as_cpu = client.post("/api/compatibility", json={"cpu_id": 8})
    cpu_as_board = client.post("/api/compatibility", json={"motherboard_id": 2})
    swapped = client.post("/api/compatibility", json={"cpu_id": 8, "motherboard_id": 2})

    assert board_as_cpu.status_code == 400
    assert cpu_as_board.status_code == 400
    assert swapped.status_code == 400
    assert "not a CPU" in board_as_cpu.json()["detail"]
