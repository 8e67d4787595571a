from conftest import auth

MARCH = ("2026-03-01T00:00:00Z", "2026-04-01T00:00:00Z")


def setup_listing(register, create_property, approve):
    landlord, _ = register("land@campus.example.com", role="LANDLORD")
    prop = create_property(landlord)
    approve(prop["id"])
    return landlord, prop


def test_student_books_and_landlord_approves(client, register, create_property, approve, book):
    landlord, prop = setup_listing(register, create_property, approve)
    student, student_user = register("stu@campus.example.com")

    r = book(student, prop["id"], *MARCH)
    assert r.status_code == 201
    booking = r.json()["data"]
    assert booking["status"] == "PENDING"
    assert booking["studentId"] == student_user["id"]
    assert booking["property"]["title"] == prop["title"]

    r = client.patch(f"/bookings/{booking['id']}", json={"status": "APPROVED"}, headers=auth(landlord))
    assert r.status_code == 200
    assert r.json()["data"]["status"] == "APPROVED"


def test_only_students_book(register, create_property, approve, book):
    landlord, prop = setup_listing(register, create_property, approve)
    r = book(landlord, prop["id"], *MARCH)
    assert r.status_code == 403
    assert r.json()["message"] == "Only students can create bookings"


def test_booking_requires_auth(client):
    r = client.post(
        "/bookings",
        json={"propertyId": 1, "leaseStart": MARCH[0], "leaseEnd": MARCH[1]},
    )
    assert r.status_code == 401


def test_end_must_follow_start(register, create_property, approve, book):
    _, prop = setup_listing(register, create_property, approve)
    student, _ = register("stu@campus.example.com")
    r = book(student, prop["id"], "2026-03-01T00:00:00Z", "2026-03-01T00:00:00Z")
    assert r.status_code == 400
    assert r.json()["message"] == "Lease end date must be after start date"


def test_missing_property(register, book):
    student, _ = register("stu@campus.example.com")
    r = book(student, 12345, *MARCH)
    assert r.status_code == 404
    assert r.json()["message"] == "Property not found"


def test_overlapping_booking_is_rejected(register, create_property, approve, book):
    _, prop = setup_listing(register, create_property, approve)
    first, _ = register("first@campus.example.com")
    second, _ = register("second@campus.example.com")

    assert book(first, prop["id"], *MARCH).status_code == 201
    r = book(second, prop["id"], "2026-03-15T00:00:00Z", "2026-05-01T00:00:00Z")
    assert r.status_code == 400
    assert r.json() == {
        "success": False,
        "message": "Property is already booked for the selected dates",
    }
    # same student, fully contained range
    r = book(first, prop["id"], "2026-03-10T00:00:00Z", "2026-03-20T00:00:00Z")
    assert r.status_code == 400


def test_touching_ranges_do_not_overlap(register, create_property, approve, book):
    _, prop = setup_listing(register, create_property, approve)
    first, _ = register("first@campus.example.com")
    second, _ = register("second@campus.example.com")

    assert book(first, prop["id"], *MARCH).status_code == 201
    assert book(second, prop["id"], MARCH[1], "2026-05-01T00:00:00Z").status_code == 201
    assert book(second, prop["id"], "2026-02-01T00:00:00Z", MARCH[0]).status_code == 201


def test_timezone_offsets_are_normalised(register, create_property, approve, book):
    _, prop = setup_listing(register, create_property, approve)
    first, _ = register("first@campus.example.com")
    second, _ = register("second@campus.example.com")

    assert book(first, prop["id"], *MARCH).status_code == 201
    # 2026-04-01T00:30+01:00 is 2026-03-31T23:30Z, inside March
    r = book(second, prop["id"], "2026-04-01T00:30:00+01:00", "2026-05-01T00:00:00Z")
    assert r.status_code == 400


def test_rejected_booking_frees_the_dates(client, register, create_property, approve, book):
    landlord, prop = setup_listing(register, create_property, approve)
    first, _ = register("first@campus.example.com")
    second, _ = register("second@campus.example.com")

    booking_id = book(first, prop["id"], *MARCH).json()["data"]["id"]
    r = client.patch(f"/bookings/{booking_id}", json={"status": "REJECTED"}, headers=auth(landlord))
    assert r.json()["data"]["status"] == "REJECTED"

    assert book(second, prop["id"], *MARCH).status_code == 201


def test_approved_booking_keeps_blocking(register, create_property, approve, approved_booking, book):
    landlord, prop = setup_listing(register, create_property, approve)
    first, _ = register("first@campus.example.com")
    second, _ = register("second@campus.example.com")

    approved_booking(first, landlord, prop["id"], *MARCH)
    assert book(second, prop["id"], *MARCH).status_code == 400


def test_booking_is_decided_once(client, register, create_property, approve, book):
    landlord, prop = setup_listing(register, create_property, approve)
    student, _ = register("stu@campus.example.com")
    booking_id = book(student, prop["id"], *MARCH).json()["data"]["id"]

    r = client.patch(f"/bookings/{booking_id}", json={"status": "APPROVED"}, headers=auth(landlord))
    assert r.status_code == 200
    for status in ("REJECTED", "APPROVED"):
        r = client.patch(f"/bookings/{booking_id}", json={"status": status}, headers=auth(landlord))
        assert r.status_code == 400
        assert r.json()["message"] == "Booking has already been processed"


def test_status_update_permissions(client, register, create_property, approve, book):
    _, prop = setup_listing(register, create_property, approve)
    other_landlord, _ = register("other@campus.example.com", role="LANDLORD")
    student, _ = register("stu@campus.example.com")
    booking_id = book(student, prop["id"], *MARCH).json()["data"]["id"]

    r = client.patch(f"/bookings/{booking_id}", json={"status": "APPROVED"}, headers=auth(student))
    assert r.status_code == 403
    assert r.json()["message"] == "Only landlords can manage bookings"

    r = client.patch(f"/bookings/{booking_id}", json={"status": "APPROVED"}, headers=auth(other_landlord))
    assert r.status_code == 403

    r = client.patch("/bookings/999", json={"status": "APPROVED"}, headers=auth(other_landlord))
    assert r.status_code == 404


def test_status_cannot_go_back_to_pending(client, register, create_property, approve, book):
    landlord, prop = setup_listing(register, create_property, approve)
    student, _ = register("stu@campus.example.com")
    booking_id = book(student, prop["id"], *MARCH).json()["data"]["id"]

    r = client.patch(f"/bookings/{booking_id}", json={"status": "PENDING"}, headers=auth(landlord))
    assert r.status_code == 400
    assert r.json()["message"] == "Validation failed"


def test_listing_is_scoped_by_role(client, register, create_property, approve, book, admin_token):
    landlord, prop = setup_listing(register, create_property, approve)
    other_landlord, _ = register("other@campus.example.com", role="LANDLORD")
    other_prop = create_property(other_landlord)
    approve(other_prop["id"])
    alice, _ = register("alice@campus.example.com")
    bob, _ = register("bob@campus.example.com")

    book(alice, prop["id"], *MARCH)
    book(bob, other_prop["id"], *MARCH)

    def total(token):
        r = client.get("/bookings", headers=auth(token))
        assert r.status_code == 200
        return r.json()["meta"]["total"]

    assert total(alice) == 1
    assert total(bob) == 1
    assert total(landlord) == 1
    assert total(other_landlord) == 1
    assert total(admin_token) == 2

    data = client.get("/bookings", headers=auth(landlord)).json()["data"]
    assert data[0]["student"]["email"] == "alice@campus.example.com"
