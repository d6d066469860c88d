"""Unit tests for the service catalog."""
from decimal import Decimal

import pytest

from laserworks.errors import BadRequestError, NotFoundError


class TestServiceManager:
    def test_get_all_services(self, service_manager, seeded):
        assert [s.title for s in service_manager.get_all_services()] == ["Wood engraving", "Glass etching"]

    def test_get_service(self, service_manager, seeded):
        service = service_manager.get_service(seeded["s1"])

        assert service.price == Decimal("100.00")
        assert service.is_active is True

    def test_get_missing_service(self, service_manager):
        with pytest.raises(NotFoundError):
            service_manager.get_service(999)

    @pytest.mark.parametrize(
        "title, description, price",
        [("", "desc", Decimal("1")), ("Title", "", Decimal("1")), ("Title", "desc", "ten")],
    )
    def test_add_service_missing_fields(self, service_manager, title, description, price):
        with pytest.raises(BadRequestError) as exc_info:
            service_manager.add_service(title, description, price)

        assert exc_info.value.message == "Missing required fields"

    def test_add_service_negative_price(self, service_manager):
        with pytest.raises(BadRequestError):
            service_manager.add_service("Title", "desc", Decimal("-1"))

    def test_update(self, service_manager, seeded):
        service = service_manager.update(seeded["s1"], {"price": Decimal("120.50"), "isActive": False})

        assert service.price == Decimal("120.50")
        assert service.is_active is False
        assert service.title == "Wood engraving"

    def test_update_missing(self, service_manager):
        with pytest.raises(NotFoundError):
            service_manager.update(999, {"title": "X"})

    def test_update_empty(self, service_manager, seeded):
        with pytest.raises(BadRequestError):
            service_manager.update(seeded["s1"], {})

    def test_activate_and_deactivate(self, service_manager, seeded):
        assert service_manager.activate(seeded["s2"]).is_active is True
        assert service_manager.deactivate(seeded["s2"]).is_active is False

    def test_activate_missing(self, service_manager):
        with pytest.raises(NotFoundError):
            service_manager.activate(999)

    def test_remove(self, service_manager, seeded):
        service_manager.remove(seeded["s2"])

        with pytest.raises(NotFoundError):
            service_manager.get_service(seeded["s2"])

    def test_remove_missing(self, service_manager):
        with pytest.raises(NotFoundError):
            service_manager.remove(999)

    def test_service_reviews(self, service_manager, seeded):
        reviews = service_manager.get_service_reviews(seeded["s1"])

        assert len(reviews) == 1
        assert reviews[0]["username"] == "u1"
        assert reviews[0]["rating"] == 5

    def test_service_without_reviews(self, service_manager, seeded):
        assert service_manager.get_service_reviews(seeded["s2"]) == []

    def test_reviews_of_missing_service(self, service_manager):
        with pytest.raises(NotFoundError):
            service_manager.get_service_reviews(999)

    def test_update_column_name_passes_through(self, service_manager, seeded):
        assert service_manager.update(seeded["s1"], {"is_active": False}).is_active is False

    def test_update_unknown_field(self, service_manager, seeded):
        with pytest.raises(BadRequestError) as exc_info:
            service_manager.update(seeded["s1"], {"discount": 10})

        assert exc_info.value.message == "Unknown field: discount"
