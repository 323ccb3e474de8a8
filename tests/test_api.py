"""
HTTP surface: auth, error envelope and an end-to-end HR/employee flow
"""
import pytest


def register(client, email, role, **extra):
    payload = {"name": email.split("@")[0], "email": email, "role": role, **extra}
    return client.post("/users/", json=payload)


@pytest.fixture
def hr(client, auth_headers):
    response = register(client, "hr@x.com", "hr", company_name="X Corp", company_logo="https://img.test/x.png")
    assert response.status_code == 201
    return auth_headers("hr@x.com")


@pytest.fixture
def employee(client, auth_headers):
    response = register(client, "e@x.com", "employee")
    assert response.status_code == 201
    return auth_headers("e@x.com")


def create_asset(client, headers, quantity=1, product_type="returnable", name="Laptop"):
    response = client.post(
        "/assets/",
        json={
            "product_name": name,
            "product_image": "https://img.test/asset.png",
            "product_type": product_type,
            "available_quantity": quantity,
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_registration(client, hr):
    me = client.get("/users/me", headers=hr).json()
    assert me["role"] == "hr"
    assert me["package"]["name"] == "Default Free Package"
    assert me["package"]["employees_limit"] == 5
    assert me["company_id"]

    duplicate = register(client, "hr@x.com", "hr", company_name="X Corp")
    assert duplicate.status_code == 409
    assert duplicate.json() == {"message": "User already exists"}


def test_hr_registration_needs_company(client):
    response = register(client, "lonely@x.com", "hr")
    assert response.status_code == 400
    assert "company_name" in response.json()["message"]


def test_invalid_body_uses_message_envelope(client):
    response = client.post("/users/", json={"name": "x", "email": "not-an-email", "role": "hr"})
    assert response.status_code == 400
    assert set(response.json()) == {"message"}
    assert response.json()["message"].startswith("email")


def test_authentication_required(client, employee):
    assert client.get("/users/me").status_code == 401
    bad = client.get("/users/me", headers={"Authorization": "Bearer not-a-token"})
    assert bad.status_code == 401
    assert "message" in bad.json()


def test_unregistered_principal(client, auth_headers):
    assert client.get("/users/me", headers=auth_headers("ghost@x.com")).status_code == 401


def test_role_gates(client, hr, employee):
    assert client.get("/assets/", headers=employee).status_code == 403
    assert client.get("/assigned-assets", headers=hr).status_code == 403
    assert client.get("/users/e@x.com/role", headers=hr).json() == {"email": "e@x.com", "role": "employee"}


def test_malformed_and_missing_ids(client, hr):
    assert client.get("/assets/abc", headers=hr).status_code == 400
    assert client.get("/assets/424242", headers=hr).status_code == 404
    assert client.patch("/requests/xyz", json={"action": "approved"}, headers=hr).status_code == 400
    assert client.patch("/assets/return/0", headers=hr).status_code == 400


def test_asset_crud(client, hr):
    asset = create_asset(client, hr, quantity=3)
    assert asset["hr_email"] == "hr@x.com"
    assert asset["company_name"] == "X Corp"

    updated = client.patch(f"/assets/{asset['id']}", json={"product_name": "Desk"}, headers=hr)
    assert updated.json()["product_name"] == "Desk"
    assert client.patch(f"/assets/{asset['id']}", json={"product_name": "  "}, headers=hr).status_code == 400

    ignored = client.patch(f"/assets/{asset['id']}", json={"available_quantity": 99}, headers=hr)
    assert ignored.json()["available_quantity"] == 3
    restocked = client.post(f"/assets/{asset['id']}/restock", json={"quantity": 2}, headers=hr)
    assert restocked.status_code == 200
    assert restocked.json()["available_quantity"] == 5
    assert client.post(f"/assets/{asset['id']}/restock", json={"quantity": 0}, headers=hr).status_code == 400

    assert [a["id"] for a in client.get("/assets/", headers=hr).json()] == [asset["id"]]
    assert client.delete(f"/assets/{asset['id']}", headers=hr).json() == {"message": "Asset deleted successfully"}
    assert client.get(f"/assets/{asset['id']}", headers=hr).status_code == 404


def test_request_approval_flow(client, hr, employee):
    asset = create_asset(client, hr, quantity=1)
    available = client.get("/assets/available", headers=employee).json()
    assert [a["id"] for a in available] == [asset["id"]]

    request = client.post("/requests/", json={"asset_id": asset["id"], "note": "need it"}, headers=employee)
    assert request.status_code == 201
    request = request.json()
    assert request["request_status"] == "pending"
    assert request["requester_email"] == "e@x.com"

    assert [r["id"] for r in client.get("/requests/hr", headers=hr).json()] == [request["id"]]

    approved = client.patch(f"/requests/{request['id']}", json={"action": "approved"}, headers=hr)
    assert approved.status_code == 200, approved.text
    assert approved.json()["request_status"] == "approved"

    again = client.patch(f"/requests/{request['id']}", json={"action": "rejected"}, headers=hr)
    assert again.status_code == 409

    held = client.get("/assigned-assets", headers=employee).json()
    assert len(held) == 1 and held[0]["status"] == "assigned"
    assert client.get("/assets/available", headers=employee).json() == []

    employees = client.get("/affiliations/hr", headers=hr).json()
    assert employees[0]["employee_email"] == "e@x.com"
    assert employees[0]["assets_count"] == 1
    companies = client.get("/affiliations/employee", headers=employee).json()
    assert companies[0]["company_name"] == "X Corp"
    team = client.get("/affiliations/employee-team", params={"hr_email": "hr@x.com"}, headers=employee).json()
    assert [m["employee_email"] for m in team] == ["e@x.com"]

    returned = client.patch(f"/assets/return/{held[0]['id']}", headers=employee)
    assert returned.status_code == 200
    assert returned.json()["status"] == "returned"
    assert client.patch(f"/assets/return/{held[0]['id']}", headers=employee).status_code == 409
    assert client.get(f"/assets/{asset['id']}", headers=hr).json()["available_quantity"] == 1


def test_direct_assignment_and_removal(client, hr, employee):
    asset = create_asset(client, hr, quantity=2, product_type="non-returnable", name="Pen")

    denied = client.patch(f"/assets/assign/{asset['id']}", json={"employee_email": "e@x.com"}, headers=hr)
    assert denied.status_code == 403

    added = client.post("/affiliations/", json={"employee_email": "e@x.com"}, headers=hr)
    assert added.status_code == 201
    assert client.post("/affiliations/", json={"employee_email": "e@x.com"}, headers=hr).status_code == 409
    assert client.post("/affiliations/", json={"employee_email": "ghost@x.com"}, headers=hr).status_code == 404

    assigned = client.patch(f"/assets/assign/{asset['id']}", json={"employee_email": "e@x.com"}, headers=hr)
    assert assigned.status_code == 200
    assert client.patch(f"/assets/return/{assigned.json()['id']}", headers=employee).status_code == 403

    assert client.patch("/affiliations/remove/e@x.com", headers=hr).status_code == 200
    assert client.patch("/affiliations/remove/e@x.com", headers=hr).status_code == 404
    assert client.get("/affiliations/hr", headers=hr).json() == []
    assert client.get("/users/me", headers=employee).json()["status"] == "unassigned"


def test_employee_limit_blocks_new_affiliation(client, hr, auth_headers):
    for i in range(5):
        register(client, f"e{i}@x.com", "employee")
        assert client.post("/affiliations/", json={"employee_email": f"e{i}@x.com"}, headers=hr).status_code == 201

    assert client.get("/packages/limit", headers=hr).json() == {"within_limit": False, "current": 5, "limit": 5}

    register(client, "sixth@x.com", "employee")
    blocked = client.post("/affiliations/", json={"employee_email": "sixth@x.com"}, headers=hr)
    assert blocked.status_code == 403
    assert "limit" in blocked.json()["message"].lower()


def test_checkout_and_payment(client, hr, fake_gateway):
    packages = client.get("/packages").json()
    assert [p["name"] for p in packages] == ["Basic", "Standard", "Premium"]

    session = client.post(
        "/create-checkout-session",
        json={"package_name": "Standard", "price": 8, "employee_limit": 10},
    )
    assert session.status_code == 200
    tracking_id = session.json()["tracking_id"]
    assert fake_gateway.sessions[0]["package_name"] == "Standard"

    payload = {"tracking_id": tracking_id, "transaction_id": "txn_1", "package_name": "Standard", "employee_limit": 10, "amount": 8}
    first = client.post("/payments", json=payload, headers=hr)
    assert first.status_code == 200
    assert first.json()["created"] is True
    second = client.post("/payments", json=payload, headers=hr)
    assert second.json()["created"] is False
    assert second.json()["payment"]["id"] == first.json()["payment"]["id"]

    history = client.get("/payments/history", headers=hr).json()
    assert [p["tracking_id"] for p in history] == [tracking_id]
    assert client.get("/packages/limit", headers=hr).json()["limit"] == 10

    unknown = client.post("/payments", json={**payload, "tracking_id": "other", "package_name": "Gold"}, headers=hr)
    assert unknown.status_code == 400
    underpaid = client.post("/payments", json={**payload, "tracking_id": "cheap", "amount": 1}, headers=hr)
    assert underpaid.status_code == 400
    assert "price" in underpaid.json()["message"]


def test_downgrade_to_free(client, hr):
    client.post(
        "/payments",
        json={"tracking_id": "trk-up", "package_name": "Standard", "amount": 8},
        headers=hr,
    )
    for i in range(7):
        register(client, f"e{i}@x.com", "employee")
        client.post("/affiliations/", json={"employee_email": f"e{i}@x.com"}, headers=hr)

    result = client.post("/downgrade-to-free", headers=hr)
    assert result.status_code == 200
    assert result.json()["deactivated"] == 2
    assert result.json()["package"]["employees_limit"] == 5
    remaining = [e["employee_email"] for e in client.get("/affiliations/hr", headers=hr).json()]
    assert remaining == [f"e{i}@x.com" for i in range(5)]
