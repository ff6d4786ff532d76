import pytest

BASE = "/api/v1/adoption-requests"


def _create(client, caller, user, animal, note="We have a big garden."):
    caller.act_as(user)
    return client.post(BASE, json={"animal_id": animal.animal_id, "note": note})


def test_create_returns_201_with_envelope(client, caller, users, animals):
    res = _create(client, caller, users["alice"], animals["max"])

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["status"] == 201
    assert body["path"] == BASE
    assert body["adoption_request"]["status"] == "PENDING"
    assert body["adoption_request"]["decision_at"] is None
    assert body["adoption_request"]["requester_id"] == users["alice"].user_id


def test_missing_identity_is_401(client, caller, animals):
    caller.sign_out()
    res = client.post(BASE, json={"animal_id": animals["max"].animal_id, "note": "hi"})

    assert res.status_code == 401
    assert res.json()["code"] == "AUTH_401_1"


def test_malformed_body_is_400(client, caller, users):
    caller.act_as(users["alice"])
    res = client.post(BASE, json={"note": "no animal"})

    assert res.status_code == 400
    assert res.json()["code"] == "REQUEST_400_1"


@pytest.mark.parametrize(
    "user_key, animal_key, note, status, code",
    [
        ("owner", "max", "mine", 403, "ADOPT_CREATE_403_1"),
        ("alice", "rex", "hi", 409, "ADOPT_CREATE_409_1"),
        ("alice", "max", "  ", 400, "ADOPT_CREATE_400_1"),
    ],
)
def test_create_failure_status_mapping(client, caller, users, animals, user_key, animal_key, note, status, code):
    res = _create(client, caller, users[user_key], animals[animal_key], note=note)

    assert res.status_code == status
    body = res.json()
    assert body["success"] is False
    assert body["code"] == code


def test_create_unknown_animal_is_404(client, caller, users):
    caller.act_as(users["alice"])
    res = client.post(BASE, json={"animal_id": 9999, "note": "hi"})
    assert res.status_code == 404


def test_duplicate_is_409(client, caller, users, animals):
    _create(client, caller, users["alice"], animals["max"])
    res = _create(client, caller, users["alice"], animals["max"])

    assert res.status_code == 409
    assert res.json()["code"] == "ADOPT_CREATE_409_2"


def test_approve_flow(client, caller, users, animals):
    alice_id = _create(client, caller, users["alice"], animals["max"]).json()["adoption_request"]["request_id"]
    bob_id = _create(client, caller, users["bob"], animals["max"]).json()["adoption_request"]["request_id"]

    caller.act_as(users["owner"])
    res = client.patch(f"{BASE}/{alice_id}/status", json={"status": "APPROVED"})

    assert res.status_code == 200
    body = res.json()
    assert body["adoption_request"]["status"] == "APPROVED"
    assert body["rejected_count"] == 1
    assert body["animal_adopted"] is True

    res = client.get(f"{BASE}/{bob_id}")
    assert res.json()["adoption_request"]["status"] == "REJECTED"

    animal = client.get(f"/api/v1/animals/{animals['max'].animal_id}").json()["animal"]
    assert animal["adopted"] is True


def test_decide_failure_status_mapping(client, caller, users, animals):
    rid = _create(client, caller, users["alice"], animals["max"]).json()["adoption_request"]["request_id"]

    caller.act_as(users["bob"])
    assert client.patch(f"{BASE}/{rid}/status", json={"status": "APPROVED"}).status_code == 403

    caller.act_as(users["owner"])
    assert client.patch(f"{BASE}/9999/status", json={"status": "APPROVED"}).status_code == 404
    assert client.patch(f"{BASE}/{rid}/status", json={"status": "MAYBE"}).status_code == 400

    assert client.patch(f"{BASE}/{rid}/status", json={"status": "REJECTED"}).status_code == 200
    res = client.patch(f"{BASE}/{rid}/status", json={"status": "APPROVED"})
    assert res.status_code == 400
    assert res.json()["code"] == "ADOPT_DECIDE_400_2"


def test_note_update_and_cancel(client, caller, users, animals):
    rid = _create(client, caller, users["alice"], animals["max"]).json()["adoption_request"]["request_id"]

    res = client.patch(f"{BASE}/{rid}/note", json={"note": "Updated"})
    assert res.status_code == 200
    assert res.json()["adoption_request"]["note"] == "Updated"

    caller.act_as(users["bob"])
    assert client.patch(f"{BASE}/{rid}/note", json={"note": "x"}).status_code == 403
    assert client.delete(f"{BASE}/{rid}").status_code == 403

    caller.act_as(users["alice"])
    assert client.delete(f"{BASE}/{rid}").status_code == 200
    assert client.get(f"{BASE}/{rid}").status_code == 404


def test_listings(client, caller, users, animals):
    _create(client, caller, users["alice"], animals["max"])
    _create(client, caller, users["alice"], animals["misty"])
    _create(client, caller, users["bob"], animals["luna"])

    caller.act_as(users["alice"])
    mine = client.get(f"{BASE}/me").json()
    assert mine["total_count"] == 2

    caller.act_as(users["owner"])
    received = client.get(f"{BASE}/received").json()
    assert received["total_count"] == 2

    one = client.get(f"{BASE}/received/{animals['max'].animal_id}")
    assert one.status_code == 200
    assert one.json()["total_count"] == 1

    assert client.get(f"{BASE}/received/{animals['misty'].animal_id}").status_code == 403
    assert client.get(f"{BASE}/received/9999").status_code == 404

    count = client.get(f"{BASE}/animal/{animals['max'].animal_id}/count").json()
    assert count["count"] == 1
    assert count["request_status"] == "PENDING"

    assert client.get(f"{BASE}/animal/{animals['max'].animal_id}/count?status=bogus").status_code == 400
    assert client.get(f"{BASE}/animal/{animals['luna'].animal_id}").json()["total_count"] == 1


def test_list_all_is_admin_only(client, caller, users, animals):
    _create(client, caller, users["alice"], animals["max"])

    caller.act_as(users["alice"])
    res = client.get(BASE)
    assert res.status_code == 403
    assert res.json()["code"] == "ADOPT_LIST_403_2"

    caller.act_as(users["admin"])
    res = client.get(BASE)
    assert res.status_code == 200
    assert res.json()["total_count"] == 1
