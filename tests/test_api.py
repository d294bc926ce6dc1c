import pytest

from cargoplan import crud
from cargoplan.seed import SAMPLE_CONTAINER_TYPES, SAMPLE_ITEM_TYPES, seed_catalog


@pytest.fixture
def unit_cube(client):
    response = client.post(
        "/item-types/",
        json={
            "item_type_name": "Unit Cube",
            "item_length": 1,
            "item_width": 1,
            "item_height": 1,
            "item_weight": 1,
        },
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def small_truck(client):
    response = client.post(
        "/container-types/",
        json={
            "container_type_name": "Small Truck",
            "load_length": 3,
            "load_width": 2,
            "load_height": 2,
            "load_weight": 500,
        },
    )
    assert response.status_code == 201
    return response.json()


def calculation_payload(item, container, quantity, label="Order A"):
    return {
        "label": label,
        "items": [{"item_type_id": item["item_type_id"], "quantity": quantity}],
        "container_type_id": container["container_type_id"],
    }


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "cargoplan"}


def test_catalog_listing(client, unit_cube, small_truck):
    items = client.get("/item-types/").json()
    containers = client.get("/container-types/").json()

    assert items["total_count"] == 1
    assert items["items"][0]["item_type_name"] == "Unit Cube"
    assert containers["total_count"] == 1
    assert containers["items"][0]["load_weight"] == 500


def test_duplicate_item_type_conflicts(client, unit_cube):
    response = client.post(
        "/item-types/",
        json={
            "item_type_name": "Unit Cube",
            "item_length": 2,
            "item_width": 2,
            "item_height": 2,
            "item_weight": 2,
        },
    )
    assert response.status_code == 409


def test_item_type_rejects_zero_dimension(client):
    response = client.post(
        "/item-types/",
        json={
            "item_type_name": "Sheet",
            "item_length": 0.5,
            "item_width": 0.5,
            "item_height": 0,
            "item_weight": 1,
        },
    )

    assert response.status_code == 422
    assert client.get("/item-types/").json()["total_count"] == 0


def test_container_type_rejects_zero_dimension(client):
    response = client.post(
        "/container-types/",
        json={
            "container_type_name": "Flat",
            "load_length": 3,
            "load_width": 2,
            "load_height": 0,
            "load_weight": 500,
        },
    )
    assert response.status_code == 422


def test_upload_item_types_csv(client):
    content = b"Name,Length,Width,Height,Weight\nCrate,1.0,1.0,1.0,5.0\nTube,2.0,0.2,0.2,1.5\n"
    response = client.post(
        "/item-types/upload/", files={"file": ("items.csv", content, "text/csv")}
    )

    assert response.status_code == 200
    assert response.json() == {"message": "2 item types uploaded successfully!"}
    names = [i["item_type_name"] for i in client.get("/item-types/").json()["items"]]
    assert names == ["Crate", "Tube"]


def test_upload_rejects_unknown_extension(client):
    response = client.post(
        "/item-types/upload/", files={"file": ("items.txt", b"nope", "text/plain")}
    )
    assert response.status_code == 400


def test_calculate(client, unit_cube, small_truck):
    response = client.post(
        "/calculations/calculate",
        json=calculation_payload(unit_cube, small_truck, 13),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "Planned"
    assert body["calculated_containers"] == 2
    assert body["container_volume"] == 12
    assert body["weight_capacity"] == 500
    assert [c["container"] for c in body["containers"]] == [1, 2]
    assert body["containers"][0]["utilization"] == 100.0

    group = body["containers"][1]["item_groups"][0]
    assert group["count"] == 1
    assert group["position_pattern"]["start"] == {"x": 0, "y": 0, "z": 0}
    assert group["grid_capacity"] == {"x": 3, "y": 2, "z": 2}
    assert body["recommendations"] == [
        {"item_type": body["items"][0]["item_type"], "max_quantity": 11}
    ]


def test_calculate_unknown_item_type(client, small_truck):
    payload = {
        "label": "Order A",
        "items": [{"item_type_id": 999, "quantity": 1}],
        "container_type_id": small_truck["container_type_id"],
    }
    response = client.post("/calculations/calculate", json=payload)

    assert response.status_code == 404
    assert response.json()["detail"] == "Item type 999 not found."


def test_calculate_unknown_container_type(client, unit_cube):
    payload = calculation_payload(unit_cube, {"container_type_id": 999}, 1)
    response = client.post("/calculations/calculate", json=payload)

    assert response.status_code == 404
    assert response.json()["detail"] == "Container type 999 not found."


def test_calculate_negative_quantity(client, unit_cube, small_truck):
    response = client.post(
        "/calculations/calculate",
        json=calculation_payload(unit_cube, small_truck, -1),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Quantity cannot be negative."


def test_calculate_oversized_item(client, small_truck):
    item = client.post(
        "/item-types/",
        json={
            "item_type_name": "Pipe",
            "item_length": 4,
            "item_width": 0.1,
            "item_height": 0.1,
            "item_weight": 1,
        },
    ).json()
    response = client.post(
        "/calculations/calculate",
        json=calculation_payload(item, small_truck, 1),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Item Pipe is too large for the container."


def test_save_and_list(client, unit_cube, small_truck):
    response = client.post(
        "/calculations/", json=calculation_payload(unit_cube, small_truck, 13)
    )

    assert response.status_code == 201
    record = response.json()
    assert record["status"] == "Planned"
    assert record["calculated_containers"] == 2
    assert record["calculation_items"][0]["qty"] == 13
    assert record["calculation_items"][0]["item_type"]["item_type_name"] == "Unit Cube"

    history = client.get("/calculations/").json()
    assert [r["calculation_id"] for r in history] == [record["calculation_id"]]


def test_search_planned_until_shipped(client, unit_cube, small_truck):
    saved = client.post(
        "/calculations/", json=calculation_payload(unit_cube, small_truck, 2)
    ).json()

    found = client.get("/calculations/search", params={"label": "Order A"}).json()
    assert found["message"] == "A planned shipment already exists for this label."
    assert found["existing_calculations"][0]["calculation_id"] == saved["calculation_id"]

    response = client.put(
        f"/calculations/{saved['calculation_id']}", json={"status": "Shipped"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "Shipped"

    after = client.get("/calculations/search", params={"label": "Order A"}).json()
    assert after == {
        "message": "No planned shipment found for this label. Proceed with new calculation.",
        "existing_calculations": [],
    }


def test_update_label_keeps_packing(client, unit_cube, small_truck):
    saved = client.post(
        "/calculations/", json=calculation_payload(unit_cube, small_truck, 13)
    ).json()

    updated = client.put(
        f"/calculations/{saved['calculation_id']}", json={"label": "Order B"}
    ).json()

    assert updated["label"] == "Order B"
    assert updated["calculated_containers"] == 2
    assert updated["utilization"] == saved["utilization"]


def test_update_items_resimulates(client, unit_cube, small_truck):
    saved = client.post(
        "/calculations/", json=calculation_payload(unit_cube, small_truck, 13)
    ).json()
    client.put(f"/calculations/{saved['calculation_id']}", json={"status": "Shipped"})

    updated = client.put(
        f"/calculations/{saved['calculation_id']}",
        json={"items": [{"item_type_id": unit_cube["item_type_id"], "quantity": 1}]},
    ).json()

    assert updated["calculated_containers"] == 1
    assert updated["calculation_items"][0]["qty"] == 1
    assert updated["total_weight"] == 1
    assert updated["status"] == "Shipped"
    assert updated["label"] == "Order A"


def test_update_unknown_calculation(client):
    response = client.put("/calculations/999", json={"label": "x"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Calculation 999 not found."


def test_update_with_unknown_container_leaves_record(client, unit_cube, small_truck):
    saved = client.post(
        "/calculations/", json=calculation_payload(unit_cube, small_truck, 13)
    ).json()

    response = client.put(
        f"/calculations/{saved['calculation_id']}", json={"container_type_id": 999}
    )
    assert response.status_code == 404

    history = client.get("/calculations/").json()
    assert history[0]["container_type"]["container_type_id"] == small_truck["container_type_id"]


def test_seed_catalog_runs_once(db):
    assert seed_catalog(db) is True
    assert crud.count_item_types(db) == len(SAMPLE_ITEM_TYPES)
    assert crud.count_container_types(db) == len(SAMPLE_CONTAINER_TYPES)

    assert seed_catalog(db) is False
    assert crud.count_item_types(db) == len(SAMPLE_ITEM_TYPES)
