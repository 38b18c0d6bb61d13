"""Tests for the authentication router."""

from datetime import UTC, datetime, timedelta

from tests.conftest import TEST_SECRET, auth_header, login_user, register_user
from todo_api.routers.auth import FORGOT_PASSWORD_MESSAGE
from todo_api.services.auth_service import TokenService
from todo_api.services.repositories import ResetTokenRepository, UserRepository


def _reset_token_from_email(email_service) -> str:
    reset_url = email_service.send_password_reset_email.call_args.args[1]
    return reset_url.rsplit("/", 1)[-1]


class TestRegister:
    def test_register_success(self, client):
        test_client, _, _ = client
        response = register_user(test_client, "alice", "alice@example.com", "Passw0rd!")

        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "alice"
        assert body["email"] == "alice@example.com"
        assert body["role"] == "user"
        assert isinstance(body["id"], int)
        assert "password" not in body
        assert "password_hash" not in body

    def test_register_duplicate_email(self, client):
        test_client, _, _ = client
        register_user(test_client, "alice", "alice@example.com", "Passw0rd!")

        response = register_user(test_client, "alice2", "alice@example.com", "Passw0rd!")

        assert response.status_code == 409
        assert response.json() == {"error": "Username or email already exists"}

    def test_register_duplicate_username(self, client):
        test_client, _, _ = client
        register_user(test_client, "alice", "alice@example.com", "Passw0rd!")

        response = register_user(test_client, "alice", "other@example.com", "Passw0rd!")

        assert response.status_code == 409

    def test_register_email_differing_only_in_case(self, client):
        test_client, _, _ = client
        register_user(test_client, "alice", "alice@example.com", "Passw0rd!")

        response = register_user(test_client, "alice2", "Alice@example.com", "0therPassword")

        assert response.status_code == 409
        assert response.json() == {"error": "Username or email already exists"}
        login_user(test_client, "Alice@example.com", "Passw0rd!")

    def test_register_accepts_password_without_mixed_case(self, client):
        test_client, _, _ = client
        response = register_user(test_client, "alice", "alice@example.com", "password123")

        assert response.status_code == 201
        login_user(test_client, "alice@example.com", "password123")

    def test_register_password_over_72_bytes(self, client):
        test_client, _, _ = client
        # 40 characters, 80 bytes in UTF-8
        response = register_user(test_client, "alice", "alice@example.com", "é" * 40)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request payload"}

    def test_register_invalid_email(self, client):
        test_client, _, _ = client
        response = register_user(test_client, "alice", "not-an-email", "Passw0rd!")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request payload"}

    def test_register_weak_password(self, client):
        test_client, _, _ = client
        response = register_user(test_client, "alice", "alice@example.com", "short")

        assert response.status_code == 400

    def test_register_missing_fields(self, client):
        test_client, _, _ = client
        response = test_client.post("/api/register", json={"email": "alice@example.com"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request payload"}

    def test_register_malformed_json(self, client):
        test_client, _, _ = client
        response = test_client.post(
            "/api/register",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400


class TestLogin:
    def test_login_success(self, client):
        test_client, _, _ = client
        user_id = register_user(test_client, "alice", "alice@example.com", "Passw0rd!").json()["id"]

        body = login_user(test_client, "alice@example.com", "Passw0rd!")

        assert body["user_id"] == user_id
        assert body["role"] == "user"
        assert body["token"]

    def test_login_email_is_case_insensitive(self, client):
        test_client, _, _ = client
        register_user(test_client, "alice", "alice@example.com", "Passw0rd!")

        response = test_client.post(
            "/api/login", json={"email": "ALICE@example.com", "password": "Passw0rd!"}
        )

        assert response.status_code == 200

    def test_wrong_password_and_unknown_email_look_the_same(self, client):
        test_client, _, _ = client
        register_user(test_client, "alice", "alice@example.com", "Passw0rd!")

        wrong_password = test_client.post(
            "/api/login", json={"email": "alice@example.com", "password": "WrongPass1"}
        )
        unknown_email = test_client.post(
            "/api/login", json={"email": "nobody@example.com", "password": "Passw0rd!"}
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}

    def test_login_invalid_payload(self, client):
        test_client, _, _ = client
        response = test_client.post("/api/login", json={"email": "alice@example.com"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request payload"}

    def test_login_token_claims(self, client):
        test_client, _, _ = client
        register_user(test_client, "alice", "alice@example.com", "Passw0rd!")
        body = login_user(test_client, "alice@example.com", "Passw0rd!")

        response = test_client.get("/api/protected", headers=auth_header(body["token"]))

        assert response.status_code == 200
        assert response.json() == {
            "message": "Access granted",
            "user_id": body["user_id"],
            "email": "alice@example.com",
            "role": "user",
        }


class TestForgotPassword:
    def test_same_response_for_known_and_unknown_email(self, client):
        test_client, _, email_service = client
        register_user(test_client, "alice", "alice@example.com", "Passw0rd!")

        known = test_client.post("/api/forgot-password", json={"email": "alice@example.com"})
        unknown = test_client.post("/api/forgot-password", json={"email": "nobody@example.com"})

        assert known.status_code == unknown.status_code == 200
        assert known.json() == unknown.json() == {"message": FORGOT_PASSWORD_MESSAGE}
        email_service.send_password_reset_email.assert_called_once()
        assert email_service.send_password_reset_email.call_args.args[0] == "alice@example.com"

    def test_email_failure_still_returns_generic_message(self, client):
        test_client, _, email_service = client
        email_service.send_password_reset_email.return_value = False
        register_user(test_client, "alice", "alice@example.com", "Passw0rd!")

        response = test_client.post("/api/forgot-password", json={"email": "alice@example.com"})

        assert response.status_code == 200
        assert response.json() == {"message": FORGOT_PASSWORD_MESSAGE}

    def test_invalid_email_rejected(self, client):
        test_client, _, _ = client
        response = test_client.post("/api/forgot-password", json={"email": "nope"})

        assert response.status_code == 400


class TestResetPassword:
    def _request_reset(self, test_client, email_service) -> str:
        register_user(test_client, "alice", "alice@example.com", "Passw0rd!")
        response = test_client.post("/api/forgot-password", json={"email": "alice@example.com"})
        assert response.status_code == 200
        return _reset_token_from_email(email_service)

    def test_reset_via_path_token(self, client):
        test_client, _, email_service = client
        token = self._request_reset(test_client, email_service)

        response = test_client.post(f"/api/reset-password/{token}", json={"password": "N3wPassword"})

        assert response.status_code == 200
        assert response.json() == {"message": "Password reset successfully"}
        login_user(test_client, "alice@example.com", "N3wPassword")
        old = test_client.post(
            "/api/login", json={"email": "alice@example.com", "password": "Passw0rd!"}
        )
        assert old.status_code == 401

    def test_reset_via_body_token(self, client):
        test_client, _, email_service = client
        token = self._request_reset(test_client, email_service)

        response = test_client.post(
            "/api/reset-password", json={"token": token, "password": "N3wPassword"}
        )

        assert response.status_code == 200
        login_user(test_client, "alice@example.com", "N3wPassword")

    def test_token_is_single_use(self, client):
        test_client, _, email_service = client
        token = self._request_reset(test_client, email_service)
        test_client.post(f"/api/reset-password/{token}", json={"password": "N3wPassword"})

        response = test_client.post(
            f"/api/reset-password/{token}", json={"password": "An0therPassword"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "token already used"}

    def test_unknown_token(self, client):
        test_client, _, _ = client
        response = test_client.post(f"/api/reset-password/{'0' * 64}", json={"password": "N3wPassword"})

        assert response.status_code == 400
        assert response.json() == {"error": "invalid or expired token"}

    def test_expired_token(self, client):
        test_client, db_session_maker, _ = client
        user_id = register_user(test_client, "alice", "alice@example.com", "Passw0rd!").json()["id"]
        token = TokenService.generate_reset_token()
        db = db_session_maker()
        ResetTokenRepository(db).save(
            user_id,
            TokenService.hash_reset_token(token),
            datetime.now(UTC) - timedelta(minutes=5),
        )
        db.close()

        response = test_client.post(f"/api/reset-password/{token}", json={"password": "N3wPassword"})

        assert response.status_code == 400
        assert response.json() == {"error": "token expired"}

    def test_new_request_invalidates_previous_token(self, client):
        test_client, _, email_service = client
        first = self._request_reset(test_client, email_service)
        test_client.post("/api/forgot-password", json={"email": "alice@example.com"})
        second = _reset_token_from_email(email_service)

        stale = test_client.post(f"/api/reset-password/{first}", json={"password": "N3wPassword"})
        fresh = test_client.post(f"/api/reset-password/{second}", json={"password": "N3wPassword"})

        assert stale.status_code == 400
        assert fresh.status_code == 200

    def test_reset_accepts_lowercase_only_password(self, client):
        test_client, _, email_service = client
        token = self._request_reset(test_client, email_service)

        response = test_client.post(f"/api/reset-password/{token}", json={"password": "newpassword"})

        assert response.status_code == 200
        login_user(test_client, "alice@example.com", "newpassword")

    def test_weak_new_password_rejected(self, client):
        test_client, db_session_maker, email_service = client
        token = self._request_reset(test_client, email_service)

        response = test_client.post(f"/api/reset-password/{token}", json={"password": "weak"})

        assert response.status_code == 400
        db = db_session_maker()
        user = UserRepository(db).find_by_email("alice@example.com")
        db.close()
        assert user is not None
        login_user(test_client, "alice@example.com", "Passw0rd!")


class TestProtected:
    def test_missing_header(self, client):
        test_client, _, _ = client
        response = test_client.get("/api/protected")

        assert response.status_code == 401
        assert response.json() == {"error": "Authorization header required"}

    def test_wrong_scheme(self, client):
        test_client, _, _ = client
        response = test_client.get("/api/protected", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token format"}

    def test_empty_bearer(self, client):
        test_client, _, _ = client
        response = test_client.get("/api/protected", headers={"Authorization": "Bearer "})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token format"}

    def test_garbage_token(self, client):
        test_client, _, _ = client
        response = test_client.get("/api/protected", headers=auth_header("not.a.jwt"))

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}

    def test_token_signed_with_other_secret(self, client, alice):
        test_client, _, _ = client
        forged = TokenService(TEST_SECRET).generate_session_token(
            alice["user_id"], "alice@example.com", "admin"
        )

        response = test_client.get("/api/protected", headers=auth_header(forged))

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}

    def test_expired_token(self, client, alice):
        test_client, _, _ = client
        expired = TokenService.from_settings().generate_session_token(
            alice["user_id"], "alice@example.com", "user", expires_delta=timedelta(seconds=-1)
        )

        response = test_client.get("/api/protected", headers=auth_header(expired))

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}

    def test_admin_role_in_claims(self, client, admin):
        test_client, _, _ = client
        response = test_client.get("/api/protected", headers=auth_header(admin["token"]))

        assert response.status_code == 200
        assert response.json()["role"] == "admin"


class TestRateLimits:
    def test_forgot_password_limited_after_three_requests(self, client):
        test_client, _, _ = client
        for _ in range(3):
            response = test_client.post("/api/forgot-password", json={"email": "nobody@example.com"})
            assert response.status_code == 200

        response = test_client.post("/api/forgot-password", json={"email": "nobody@example.com"})

        assert response.status_code == 429
