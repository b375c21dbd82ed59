from votecast.models import User


def test_signup_assigns_user_role(client):
    response = client.post(
        "/signup",
        json={
            "full_name": "Ada Voter",
            "email": "Ada@Example.com",
            "password": "correct-horse",
        },
    )

    assert response.status_code == 201
    user = User.query.filter_by(email="ada@example.com").one()
    assert [role.role for role in user.roles] == ["user"]
    assert user.face_registered is False
    assert user.password_hash != "correct-horse"


def test_signup_rejects_duplicate_email(client, voter):
    response = client.post(
        "/signup",
        json={"email": voter.email, "password": "long-enough"},
    )

    assert response.status_code == 400
    assert "already exists" in response.get_json()["error"]


def test_signup_rejects_short_password(client):
    response = client.post("/signup", json={"email": "a@example.com", "password": "short"})

    assert response.status_code == 400


def test_login_then_dashboard_then_logout(client):
    client.post(
        "/signup",
        json={"full_name": "Ben", "email": "ben@example.com", "password": "pass-word-1"},
    )

    bad = client.post("/login", json={"email": "ben@example.com", "password": "nope"})
    assert bad.status_code == 401

    good = client.post(
        "/login", json={"email": "ben@example.com", "password": "pass-word-1"}
    )
    assert good.status_code == 200
    assert good.get_json()["is_admin"] is False

    assert client.get("/dashboard").status_code == 200

    client.get("/logout")
    assert client.get("/dashboard").status_code == 302


def test_signup_rejects_non_text_fields(client):
    numeric_password = client.post(
        "/signup", json={"email": "c@example.com", "password": 123456789}
    )
    numeric_email = client.post("/signup", json={"email": 42, "password": "pass-word-1"})

    assert numeric_password.status_code == 400
    assert numeric_password.get_json()["error"] == "Password must be text."
    assert numeric_email.status_code == 400
    assert numeric_email.get_json()["error"] == "Email must be text."


def test_login_with_non_object_body(client):
    response = client.post("/login", json=["ben@example.com", "pass-word-1"])

    assert response.status_code == 401
    assert response.get_json()["error"] == "Invalid email or password."
