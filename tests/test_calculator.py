import pytest

from cargoplan.model import (
    CalculationPatch,
    CalculationStatus,
    ItemRequest,
    ItemType,
    apply_update,
    compute_calculation,
)
from cargoplan.model.errors import InvalidQuantity, NotFound, OversizedItem

from .sample_catalog import (
    HEAVY_SMALL_BOX,
    LARGE_BOX,
    LARGE_TRUCK,
    MEDIUM_BOX,
    SMALL_BOX,
    SMALL_TRUCK,
    TOO_LARGE_BOX,
    UNIT_CUBE,
    ZERO_VOLUME_BOX,
    ZERO_WEIGHT_BOX,
)


def recommended(result):
    return {r.item_type.id: r.max_quantity for r in result.recommendations}


def test_unknown_item_type(catalog):
    with pytest.raises(NotFound, match="Item type 999 not found."):
        compute_calculation(catalog, [ItemRequest(999, 1)], SMALL_TRUCK.id, "x")


def test_unknown_container_type(catalog):
    with pytest.raises(NotFound, match="Container type 999 not found."):
        compute_calculation(catalog, [ItemRequest(SMALL_BOX.id, 1)], 999, "x")


def test_negative_quantity(catalog):
    with pytest.raises(InvalidQuantity, match="Quantity cannot be negative."):
        compute_calculation(catalog, [ItemRequest(SMALL_BOX.id, -1)], SMALL_TRUCK.id, "x")


def test_oversized_item(catalog):
    with pytest.raises(OversizedItem, match="Item Too Large Box is too large"):
        compute_calculation(
            catalog, [ItemRequest(TOO_LARGE_BOX.id, 1)], SMALL_TRUCK.id, "x"
        )


def test_all_zero_quantities(catalog):
    result = compute_calculation(
        catalog,
        [ItemRequest(SMALL_BOX.id, 0), ItemRequest(MEDIUM_BOX.id, 0)],
        SMALL_TRUCK.id,
        "empty",
    )

    assert result.calculated_containers == 1
    assert result.total_volume == 0
    assert result.total_weight == 0
    assert result.utilization == 0
    assert result.containers[0].groups == []


def test_small_boxes(catalog):
    result = compute_calculation(
        catalog, [ItemRequest(SMALL_BOX.id, 8)], SMALL_TRUCK.id, "Order A"
    )

    assert result.label == "Order A"
    assert result.status is CalculationStatus.planned
    assert result.calculated_containers == 1
    assert result.total_volume == pytest.approx(0.008)
    assert result.total_weight == pytest.approx(1.6)
    assert result.container_volume == 12
    assert result.weight_capacity == 500
    # 1.6 / 500 kg is the binding ratio
    assert result.utilization == pytest.approx(0.3)

    ids = set(recommended(result))
    assert ids == {SMALL_BOX.id, MEDIUM_BOX.id, HEAVY_SMALL_BOX.id, LARGE_BOX.id, UNIT_CUBE.id}
    assert ZERO_VOLUME_BOX.id not in ids
    assert ZERO_WEIGHT_BOX.id not in ids
    assert TOO_LARGE_BOX.id not in ids


def test_same_inputs_give_same_result(catalog):
    requests = [ItemRequest(SMALL_BOX.id, 50), ItemRequest(MEDIUM_BOX.id, 10)]
    first = compute_calculation(catalog, requests, LARGE_TRUCK.id, "again")
    second = compute_calculation(catalog, requests, LARGE_TRUCK.id, "again")
    assert first == second


def test_weight_limit_spreads_over_two_containers(catalog):
    result = compute_calculation(
        catalog, [ItemRequest(HEAVY_SMALL_BOX.id, 400)], SMALL_TRUCK.id, "heavy"
    )

    assert result.calculated_containers == 2
    assert result.total_weight == pytest.approx(600)
    assert [c.utilization for c in result.containers] == [99.9, 20.1]
    assert result.utilization == pytest.approx(60.0)


def test_exact_fit_is_fully_utilized(catalog):
    catalog.add_item_type(ItemType(100, "Perfect Fit Box", 3, 2, 2, 500))
    result = compute_calculation(catalog, [ItemRequest(100, 1)], SMALL_TRUCK.id, "exact")

    assert result.calculated_containers == 1
    assert result.containers[0].utilization == 100.0
    assert result.utilization == 100.0
    assert result.recommendations == ()


def test_recommendations_only_from_containers_with_room(catalog):
    result = compute_calculation(
        catalog, [ItemRequest(UNIT_CUBE.id, 13)], SMALL_TRUCK.id, "cubes"
    )

    assert [c.utilization for c in result.containers][0] == 100.0
    # only the second container has 11 m3 and 499 kg left
    assert recommended(result)[UNIT_CUBE.id] == 11


@pytest.fixture
def prior(catalog):
    return compute_calculation(
        catalog, [ItemRequest(SMALL_BOX.id, 8)], SMALL_TRUCK.id, "Order A"
    )


def test_label_and_status_change_keeps_packing(catalog, prior):
    updated = apply_update(
        catalog, prior, CalculationPatch(label="Order B", status="Shipped")
    )

    assert updated.label == "Order B"
    assert updated.status is CalculationStatus.shipped
    assert updated.containers is prior.containers
    assert updated.recommendations is prior.recommendations


def test_item_change_resimulates(catalog, prior):
    updated = apply_update(
        catalog,
        prior,
        CalculationPatch(item_requests=[ItemRequest(UNIT_CUBE.id, 13)]),
    )

    assert updated.label == "Order A"
    assert updated.calculated_containers == 2
    assert updated.container_type == SMALL_TRUCK
    assert updated.item_requests == [ItemRequest(UNIT_CUBE.id, 13)]


def test_container_change_reuses_prior_items(catalog, prior):
    updated = apply_update(
        catalog, prior, CalculationPatch(container_type_id=LARGE_TRUCK.id)
    )

    assert updated.container_type == LARGE_TRUCK
    assert updated.item_requests == prior.item_requests
    assert updated.total_weight == pytest.approx(prior.total_weight)


def test_status_survives_resimulation(catalog, prior):
    shipped = apply_update(catalog, prior, CalculationPatch(status="Shipped"))
    updated = apply_update(
        catalog, shipped, CalculationPatch(container_type_id=LARGE_TRUCK.id)
    )
    assert updated.status is CalculationStatus.shipped


def test_unknown_status_rejected(catalog, prior):
    with pytest.raises(ValueError):
        apply_update(catalog, prior, CalculationPatch(status="Lost"))


def test_update_with_unknown_container(catalog, prior):
    with pytest.raises(NotFound):
        apply_update(catalog, prior, CalculationPatch(container_type_id=999))
