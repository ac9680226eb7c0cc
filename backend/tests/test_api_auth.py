"""
HTTP tests for the /api/auth endpoints.
"""
from eduhub.services import enrollment


API = "/api/auth"


def _signup(client, **overrides):
    body = {"name": "New Learner", "email": "learner@eduhub.io", "password": "secret123"}
    body.update(overrides)
    return client.post(f"{API}/signup", json=body)


class TestSignup:

    def test_signup_returns_token_and_user(self, client):
        response = _signup(client, email="Learner@EduHub.io")

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["token"]
        assert data["user"]["email"] == "learner@eduhub.io"
        assert data["user"]["role"] == "student"
        assert data["user"]["enrolledCourses"] == []
        assert "hashedPassword" not in data["user"]

    def test_duplicate_email(self, client):
        _signup(client)
        response = _signup(client, name="Someone Else")

        assert response.status_code == 400
        assert response.json() == {"error": "User already exists with this email"}

    def test_validation_messages(self, client):
        response = _signup(client, name="A", password="123")

        assert response.status_code == 400
        error = response.json()["error"]
        assert "Name must be between 2 and 100 characters" in error
        assert "Password must be at least 6 characters long" in error

    def test_invalid_email(self, client):
        response = _signup(client, email="not-an-email")

        assert response.status_code == 400
        assert "error" in response.json()


class TestLogin:

    def test_login_then_me(self, client):
        _signup(client)
        response = client.post(f"{API}/login", json={"email": "learner@eduhub.io", "password": "secret123"})

        assert response.status_code == 200
        token = response.json()["token"]

        me = client.get(f"{API}/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["user"]["email"] == "learner@eduhub.io"

    def test_wrong_password(self, client, student):
        response = client.post(f"{API}/login", json={"email": student.email, "password": "wrong-one"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_deactivated(self, client, make_user):
        user = make_user(is_active=False)
        response = client.post(f"{API}/login", json={"email": user.email, "password": "secret123"})

        assert response.status_code == 401
        assert response.json() == {"error": "Account is deactivated"}


class TestMe:

    def test_no_token(self, client):
        response = client.get(f"{API}/me")

        assert response.status_code == 401
        assert response.json() == {"error": "Not authorized, no token"}

    def test_bad_token(self, client):
        response = client.get(f"{API}/me", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json() == {"error": "Not authorized, token failed"}

    def test_me_lists_courses(self, client, db, make_course, student, auth_headers):
        first, second = make_course(), make_course()
        enrollment.enroll(db, first, student)
        enrollment.enroll(db, second, student)
        enrollment.complete(db, first, student)

        user = client.get(f"{API}/me", headers=auth_headers(student)).json()["user"]

        assert [c["id"] for c in user["enrolledCourses"]] == [first.id, second.id]
        assert [c["id"] for c in user["completedCourses"]] == [first.id]
        assert user["totalEnrolledCourses"] == 2
        assert user["totalCompletedCourses"] == 1
        assert set(user["enrolledCourses"][0]) == {"id", "title", "instructor", "thumbnail", "price"}


class TestProfileAndPassword:

    def test_update_profile(self, client, student, auth_headers):
        response = client.put(
            f"{API}/profile",
            json={"bio": "Curious", "socialLinks": {"github": "https://github.com/me"}},
            headers=auth_headers(student)
        )

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["bio"] == "Curious"
        assert user["socialLinks"]["github"] == "https://github.com/me"

    def test_email_in_use(self, client, make_user, auth_headers):
        taken, user = make_user(), make_user()

        response = client.put(f"{API}/profile", json={"email": taken.email}, headers=auth_headers(user))

        assert response.status_code == 400
        assert response.json() == {"error": "Email already in use"}

    def test_change_password(self, client, student, auth_headers):
        response = client.put(
            f"{API}/password",
            json={"currentPassword": "secret123", "newPassword": "fresh-one"},
            headers=auth_headers(student)
        )
        assert response.status_code == 200

        login = client.post(f"{API}/login", json={"email": student.email, "password": "fresh-one"})
        assert login.status_code == 200

    def test_change_password_wrong_current(self, client, student, auth_headers):
        response = client.put(
            f"{API}/password",
            json={"currentPassword": "wrong-one", "newPassword": "fresh-one"},
            headers=auth_headers(student)
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Current password is incorrect"}

    def test_logout(self, client, student, auth_headers):
        response = client.post(f"{API}/logout", headers=auth_headers(student))

        assert response.status_code == 200
        assert response.json()["success"] is True
