"""
Hash de senha, token JWT e token de reset
"""

import re
from datetime import datetime, timezone

from jose import jwt

from core.security import (
    BcryptPasswordHasher,
    JWTTokenIssuer,
    build_reset_link,
    generate_reset_token,
)


class TestBcryptPasswordHasher:
    def setup_method(self):
        self.hasher = BcryptPasswordHasher(rounds=4)

    def test_hash_and_verify(self):
        hashed = self.hasher.hash("segredo123")
        assert hashed != "segredo123"
        assert hashed.startswith("$2b$04$")
        assert self.hasher.verify("segredo123", hashed)

    def test_verify_rejects_other_passwords(self):
        hashed = self.hasher.hash("segredo123")
        for other in ["segredo124", "Segredo123", "", "segredo123 "]:
            assert not self.hasher.verify(other, hashed)

    def test_hash_is_salted(self):
        assert self.hasher.hash("segredo123") != self.hasher.hash("segredo123")

    def test_dummy_verify(self):
        assert self.hasher.dummy_verify() is None

    def test_verify_password_with_nul_byte(self):
        hashed = self.hasher.hash("segredo123")
        assert self.hasher.verify("x\x00y", hashed) is False


class TestJWTTokenIssuer:
    def test_issue_contains_claims(self):
        issuer = JWTTokenIssuer("secret", expire_minutes=60)
        token = issuer.issue(7, "maria@example.com", "aluno")

        payload = issuer.decode(token)
        assert payload["sub"] == "7"
        assert payload["userId"] == 7
        assert payload["email"] == "maria@example.com"
        assert payload["tipo"] == "aluno"
        assert payload["exp"] - payload["iat"] == 3600

    def test_token_expires_in_one_hour(self):
        token = JWTTokenIssuer("secret").issue(1, "a@example.com", "aluno")
        payload = jwt.decode(token, "secret", algorithms=["HS256"])
        remaining = payload["exp"] - datetime.now(timezone.utc).timestamp()
        assert 3500 < remaining <= 3600

    def test_decode_with_wrong_secret(self):
        token = JWTTokenIssuer("secret").issue(1, "a@example.com", "aluno")
        assert JWTTokenIssuer("other-secret").decode(token) is None

    def test_decode_expired(self):
        token = JWTTokenIssuer("secret", expire_minutes=-1).issue(1, "a@example.com", "aluno")
        assert JWTTokenIssuer("secret").decode(token) is None

    def test_decode_garbage(self):
        assert JWTTokenIssuer("secret").decode("nao-e-um-jwt") is None


class TestResetToken:
    def test_generate_reset_token(self):
        token = generate_reset_token()
        assert re.fullmatch(r"[0-9a-f]{64}", token)
        assert token != generate_reset_token()

    def test_build_reset_link(self):
        assert build_reset_link("http://localhost:4200", "abc") == "http://localhost:4200/redefinir-senha/abc"
        assert build_reset_link("http://localhost:4200/", "abc") == "http://localhost:4200/redefinir-senha/abc"
