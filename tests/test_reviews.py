from conftest import auth


def listed_property(register, create_property, approve, email="land@campus.example.com", **overrides):
    landlord, _ = register(email, role="LANDLORD")
    prop = create_property(landlord, **overrides)
    approve(prop["id"])
    return landlord, prop


def review(client, token, property_id, rating, comment=None):
    return client.post(
        "/reviews",
        json={"propertyId": property_id, "rating": rating, "comment": comment},
        headers=auth(token),
    )


def test_review_requires_approved_booking(client, register, create_property, approve, book):
    _, prop = listed_property(register, create_property, approve)
    student, _ = register("stu@campus.example.com")

    r = review(client, student, prop["id"], 5)
    assert r.status_code == 403
    assert r.json()["message"] == "You can only review properties you have booked"

    # a pending booking is not enough
    book(student, prop["id"], "2026-03-01T00:00:00Z", "2026-04-01T00:00:00Z")
    assert review(client, student, prop["id"], 5).status_code == 403


def test_one_review_per_student_and_property(client, register, create_property, approve, approved_booking):
    landlord, prop = listed_property(register, create_property, approve)
    student, _ = register("stu@campus.example.com")
    approved_booking(student, landlord, prop["id"])

    r = review(client, student, prop["id"], 4, "Clean and quiet")
    assert r.status_code == 201
    assert r.json()["data"]["rating"] == 4

    r = review(client, student, prop["id"], 2)
    assert r.status_code == 400
    assert r.json()["message"] == "You have already reviewed this property"


def test_rating_must_be_between_one_and_five(client, register):
    student, _ = register("stu@campus.example.com")
    for rating in (0, 6):
        r = review(client, student, 1, rating)
        assert r.status_code == 400
        assert "rating" in r.json()["errors"]


def test_landlords_cannot_review(client, register, create_property, approve):
    landlord, prop = listed_property(register, create_property, approve)
    r = review(client, landlord, prop["id"], 5)
    assert r.status_code == 403


def test_average_rating_on_property(client, register, create_property, approve, approved_booking):
    landlord, prop = listed_property(register, create_property, approve)
    ratings = [4, 5, 5]
    months = ["01", "04", "07"]
    for i, (rating, month) in enumerate(zip(ratings, months)):
        student, _ = register(f"stu{i}@campus.example.com", name=f"Student {i}")
        end_month = f"{int(month) + 2:02d}"
        approved_booking(
            student, landlord, prop["id"],
            f"2027-{month}-01T00:00:00Z", f"2027-{end_month}-01T00:00:00Z",
        )
        assert review(client, student, prop["id"], rating).status_code == 201

    r = client.get(f"/properties/{prop['id']}")
    data = r.json()["data"]
    assert data["avgRating"] == 4.7
    assert data["reviewCount"] == 3
    assert len(data["reviews"]) == 3
    assert {rv["student"]["name"] for rv in data["reviews"]} == {"Student 0", "Student 1", "Student 2"}

    listed = client.get("/properties").json()["data"][0]
    assert listed["avgRating"] == 4.7
    assert listed["reviewCount"] == 3

    r = client.get(f"/properties/{prop['id']}/reviews", params={"limit": 2})
    assert r.json()["meta"] == {"total": 3, "page": 1, "limit": 2, "totalPages": 2}


def test_min_rating_filter(client, register, create_property, approve, approved_booking):
    landlord, good = listed_property(register, create_property, approve, title="Well rated room")
    bad = create_property(landlord, title="Poorly rated room")
    approve(bad["id"])
    unrated = create_property(landlord, title="Room with no reviews")
    approve(unrated["id"])

    student, _ = register("stu@campus.example.com")
    approved_booking(student, landlord, good["id"])
    approved_booking(student, landlord, bad["id"])
    review(client, student, good["id"], 5)
    review(client, student, bad["id"], 2)

    r = client.get("/properties", params={"minRating": 4})
    assert [p["id"] for p in r.json()["data"]] == [good["id"]]
    assert r.json()["meta"]["total"] == 1

    r = client.get("/properties", params={"minRating": 0})
    assert r.json()["meta"]["total"] == 3


def test_concurrent_duplicate_review_is_a_conflict(
    client, register, create_property, approve, approved_booking, monkeypatch
):
    from services.review_service import ReviewService

    landlord, prop = listed_property(register, create_property, approve)
    student, _ = register("stu@campus.example.com")
    approved_booking(student, landlord, prop["id"])
    assert review(client, student, prop["id"], 4).status_code == 201

    # the other request already passed the existence check
    monkeypatch.setattr(ReviewService, "get_for_pair", lambda self, db, student_id, property_id: None)
    r = review(client, student, prop["id"], 2)
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "You have already reviewed this property"}

    detail = client.get(f"/properties/{prop['id']}").json()["data"]
    assert detail["reviewCount"] == 1
    assert detail["avgRating"] == 4.0


def test_average_of_five_three_four(client, register, create_property, approve, approved_booking):
    landlord, prop = listed_property(register, create_property, approve)
    for i, (rating, month) in enumerate(zip([5, 3, 4], ["01", "04", "07"])):
        student, _ = register(f"rater{i}@campus.example.com")
        end_month = f"{int(month) + 2:02d}"
        approved_booking(
            student, landlord, prop["id"],
            f"2028-{month}-01T00:00:00Z", f"2028-{end_month}-01T00:00:00Z",
        )
        review(client, student, prop["id"], rating)

    assert client.get(f"/properties/{prop['id']}").json()["data"]["avgRating"] == 4.0
