from decimal import Decimal

import pytest

from inventory_lib import NotFoundError, ValidationError, Vehicle, VehicleRegistry


def _registry_with_corolla():
    registry = VehicleRegistry()
    vehicle_id = registry.add_vehicle(2020, "Toyota", "Corolla", 25000.00, True)
    return registry, vehicle_id


def test_add_then_get_returns_input_fields():
    registry, vehicle_id = _registry_with_corolla()

    assert vehicle_id == 1
    vehicle = registry.get_vehicle(vehicle_id)
    assert vehicle.id == 1
    assert vehicle.year == 2020
    assert vehicle.make == "Toyota"
    assert vehicle.model == "Corolla"
    assert vehicle.price == Decimal("25000.00")
    assert vehicle.is_automatic is True


def test_add_without_transmission_keeps_it_unknown():
    registry = VehicleRegistry()
    vehicle_id = registry.add_vehicle(1999, "Honda", "Civic", Decimal("3100.50"))

    vehicle = registry.get_vehicle(vehicle_id)
    assert vehicle.is_automatic is None
    assert vehicle.transmission_label() == "unknown"


@pytest.mark.parametrize(
    "fields, bad_field",
    [
        ((1885, "Ford", "Model T", 850.00, False), "year"),
        ((2020, "", "Corolla", 100, None), "make"),
        ((2020, "   ", "Corolla", 100, None), "make"),
        ((2020, "Toyota", "", 100, None), "model"),
        ((2020, "Toyota", "Corolla", -0.01, None), "price"),
        ((2020, "Toyota", "Corolla", "cheap", None), "price"),
        ((2020, "Toyota", "Corolla", Decimal("NaN"), None), "price"),
        ((2020, "Toyota", "Corolla", 100, "yes"), "is_automatic"),
        (("2020", "Toyota", "Corolla", 100, None), "year"),
    ],
)
def test_invalid_add_is_rejected_without_changing_inventory(fields, bad_field):
    registry, _ = _registry_with_corolla()
    before = registry.list_vehicles()

    with pytest.raises(ValidationError) as exc_info:
        registry.add_vehicle(*fields)

    assert exc_info.value.field == bad_field
    assert registry.list_vehicles() == before
    assert registry.count() == 1


def test_first_violated_field_is_reported():
    registry = VehicleRegistry()
    with pytest.raises(ValidationError) as exc_info:
        registry.add_vehicle(1800, "", "", -5)
    assert exc_info.value.field == "year"


def test_year_1886_is_accepted_and_zero_price_is_allowed():
    registry = VehicleRegistry()
    vehicle_id = registry.add_vehicle(1886, "Benz", "Patent-Motorwagen", 0)
    assert registry.get_vehicle(vehicle_id).price == 0


def test_list_preserves_insertion_order():
    registry = VehicleRegistry()
    assert registry.list_vehicles() == []

    registry.add_vehicle(2020, "Toyota", "Corolla", 25000)
    registry.add_vehicle(2018, "Ford", "Focus", 12000)
    registry.add_vehicle(2022, "Tesla", "Model 3", 41000)

    assert [v.model for v in registry.list_vehicles()] == ["Corolla", "Focus", "Model 3"]
    assert len(registry) == 3


def test_returned_vehicles_are_copies():
    registry, vehicle_id = _registry_with_corolla()

    vehicle = registry.get_vehicle(vehicle_id)
    vehicle.make = "Changed"
    vehicle.year = 1000
    registry.list_vehicles()[0].model = "Changed"

    stored = registry.get_vehicle(vehicle_id)
    assert stored.make == "Toyota"
    assert stored.year == 2020
    assert stored.model == "Corolla"


def test_get_missing_vehicle_raises_not_found():
    registry = VehicleRegistry()
    with pytest.raises(NotFoundError) as exc_info:
        registry.get_vehicle(42)
    assert exc_info.value.vehicle_id == 42


def test_update_replaces_only_given_fields():
    registry, vehicle_id = _registry_with_corolla()

    registry.update_vehicle(vehicle_id, price=Decimal("23999.99"), is_automatic=None)

    vehicle = registry.get_vehicle(vehicle_id)
    assert vehicle.price == Decimal("23999.99")
    assert vehicle.is_automatic is None
    assert vehicle.make == "Toyota"
    assert vehicle.year == 2020


def test_invalid_update_applies_nothing():
    registry, vehicle_id = _registry_with_corolla()

    with pytest.raises(ValidationError) as exc_info:
        registry.update_vehicle(vehicle_id, make="Lexus", year=1700)

    assert exc_info.value.field == "year"
    vehicle = registry.get_vehicle(vehicle_id)
    assert vehicle.make == "Toyota"
    assert vehicle.year == 2020


def test_update_rejects_unknown_fields_and_id():
    registry, vehicle_id = _registry_with_corolla()

    with pytest.raises(ValidationError):
        registry.update_vehicle(vehicle_id, colour="red")
    with pytest.raises(ValidationError):
        registry.update_vehicle(vehicle_id, id=7)

    assert registry.get_vehicle(vehicle_id).id == vehicle_id


def test_update_missing_vehicle_raises_not_found():
    registry = VehicleRegistry()
    with pytest.raises(NotFoundError):
        registry.update_vehicle(3, price=10)


def test_remove_then_get_raises_not_found():
    registry, vehicle_id = _registry_with_corolla()

    registry.remove_vehicle(vehicle_id)

    with pytest.raises(NotFoundError):
        registry.get_vehicle(vehicle_id)
    with pytest.raises(NotFoundError):
        registry.remove_vehicle(vehicle_id)
    assert registry.list_vehicles() == []


def test_ids_are_never_reused():
    registry = VehicleRegistry()
    first = registry.add_vehicle(2020, "Toyota", "Corolla", 25000)
    registry.remove_vehicle(first)
    second = registry.add_vehicle(2020, "Toyota", "Corolla", 25000)

    assert first != second
    assert second == 2


def test_replace_all_keeps_ids_and_moves_counter_forward():
    registry = VehicleRegistry()
    for _ in range(5):
        registry.add_vehicle(2020, "Toyota", "Corolla", 25000)

    registry.replace_all([
        Vehicle(2, 2010, "Ford", "Fiesta", 4000),
        Vehicle(3, 2012, "Ford", "Focus", 5000, False),
    ])

    assert [v.id for v in registry.list_vehicles()] == [2, 3]
    # ids 1-5 were already issued in this process
    assert registry.add_vehicle(2021, "Kia", "Rio", 9000) == 6


def test_replace_all_counter_follows_highest_loaded_id():
    registry = VehicleRegistry()
    registry.replace_all([Vehicle(10, 2010, "Ford", "Fiesta", 4000)])
    assert registry.add_vehicle(2021, "Kia", "Rio", 9000) == 11


def test_replace_all_with_nothing_empties_inventory():
    registry, _ = _registry_with_corolla()
    registry.replace_all([])
    assert registry.count() == 0
    assert registry.add_vehicle(2021, "Kia", "Rio", 9000) == 2


def test_replace_all_rejects_duplicate_ids():
    registry, _ = _registry_with_corolla()
    with pytest.raises(ValidationError):
        registry.replace_all([
            Vehicle(4, 2010, "Ford", "Fiesta", 4000),
            Vehicle(4, 2012, "Ford", "Focus", 5000),
        ])
    assert [v.model for v in registry.list_vehicles()] == ["Corolla"]


def test_vehicle_rejects_non_positive_id():
    with pytest.raises(ValidationError) as exc_info:
        Vehicle(0, 2010, "Ford", "Fiesta", 4000)
    assert exc_info.value.field == "id"


def test_text_length_limit_applies_to_add_and_update():
    registry = VehicleRegistry()
    vehicle_id = registry.add_vehicle(2020, "M" * 100, "Corolla", 1)

    with pytest.raises(ValidationError) as exc_info:
        registry.add_vehicle(2020, "Toyota", "C" * 101, 1)
    assert exc_info.value.field == "model"

    with pytest.raises(ValidationError) as exc_info:
        registry.update_vehicle(vehicle_id, make="M" * 101)
    assert exc_info.value.field == "make"
    assert registry.get_vehicle(vehicle_id).make == "M" * 100
