from decimal import Decimal

NEW_SERVICE = {"title": "Leather branding", "description": "Logos on leather goods", "price": "35.00"}


def test_services_are_public(client, seeded):
    response = client.get("/services")

    assert response.status_code == 200
    services = response.json()["services"]
    assert [s["title"] for s in services] == ["Wood engraving", "Glass etching"]
    assert services[1]["isActive"] is False


def test_get_service(client, seeded):
    response = client.get(f"/services/{seeded['s1']}")

    assert response.status_code == 200
    assert Decimal(str(response.json()["service"]["price"])) == Decimal("100.00")


def test_get_missing_service(client, seeded):
    response = client.get("/services/999")

    assert response.status_code == 404
    assert response.json()["error"]["status"] == 404


def test_create_service_requires_admin(client, tokens):
    assert client.post("/services", json=NEW_SERVICE).status_code == 401
    assert client.post("/services", json=NEW_SERVICE, headers=tokens["u1"]).status_code == 401

    response = client.post("/services", json=NEW_SERVICE, headers=tokens["admin"])
    assert response.status_code == 201
    assert response.json()["service"]["title"] == "Leather branding"
    assert response.json()["service"]["isActive"] is True


def test_create_service_negative_price(client, tokens):
    response = client.post("/services", json={**NEW_SERVICE, "price": "-1"}, headers=tokens["admin"])

    assert response.status_code == 400


def test_update_service(client, seeded, tokens):
    response = client.patch(
        f"/services/{seeded['s1']}", json={"price": "110.00", "isActive": False}, headers=tokens["admin"]
    )

    assert response.status_code == 200
    service = response.json()["service"]
    assert Decimal(str(service["price"])) == Decimal("110.00")
    assert service["isActive"] is False
    assert service["title"] == "Wood engraving"


def test_update_missing_service(client, tokens):
    assert client.patch("/services/999", json={"title": "X"}, headers=tokens["admin"]).status_code == 404


def test_activate_and_deactivate_service(client, seeded, tokens):
    url = f"/services/{seeded['s2']}"
    assert client.patch(f"{url}/activate", headers=tokens["u1"]).status_code == 401

    assert client.patch(f"{url}/activate", headers=tokens["admin"]).json()["service"]["isActive"] is True
    assert client.patch(f"{url}/deactivate", headers=tokens["admin"]).json()["service"]["isActive"] is False


def test_delete_service(client, seeded, tokens):
    response = client.delete(f"/services/{seeded['s2']}", headers=tokens["admin"])

    assert response.status_code == 200
    assert response.json() == {"deleted": seeded["s2"]}
    assert client.delete(f"/services/{seeded['s2']}", headers=tokens["admin"]).status_code == 404


def test_service_reviews(client, seeded):
    response = client.get(f"/services/{seeded['s1']}/reviews")

    assert response.status_code == 200
    reviews = response.json()["reviews"]
    assert len(reviews) == 1
    assert reviews[0]["username"] == "u1"
    assert reviews[0]["reviewText"] == "Beautiful work"

    assert client.get(f"/services/{seeded['s2']}/reviews").json() == {"reviews": []}
    assert client.get("/services/999/reviews").status_code == 404
