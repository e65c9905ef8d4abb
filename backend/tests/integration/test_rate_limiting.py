"""Integration tests for rate limiting middleware."""
import pytest
from httpx import AsyncClient

from api.dependencies import get_generation_client
from core.interfaces.services import GenerationClient, GenerationResult
from infrastructure.database.models.user import User

pytestmark = pytest.mark.asyncio


class QuickGenerationClient(GenerationClient):
    @property
    def model(self):
        return "quick"

    async def generate(self, prompt, word_count):
        return GenerationResult(text="TITLE: Quick\n\nCONTENT:\nDone.", model=self.model)


class TestRateLimitingLogin:
    """Tests for rate limiting on login endpoint."""

    async def test_login_rate_limit_exceeded(self, async_client: AsyncClient, test_user: User):
        """Login allows 5 requests per minute."""
        for i in range(5):
            response = await async_client.post("/api/auth/login", json={
                "email": f"nonexistent{i}@example.com",
                "password": "wrongpassword"
            })
            # Wrong credentials, not throttled yet
            assert response.status_code == 401

        response = await async_client.post("/api/auth/login", json={
            "email": "another@example.com",
            "password": "wrongpassword"
        })
        assert response.status_code == 429

    async def test_rate_limit_429_response_format(self, async_client: AsyncClient):
        for i in range(5):
            await async_client.post("/api/auth/login", json={
                "email": f"user{i}@example.com",
                "password": "wrongpassword"
            })

        response = await async_client.post("/api/auth/login", json={
            "email": "user6@example.com",
            "password": "wrongpassword"
        })

        assert response.status_code == 429
        data = response.json()
        assert data["detail"].startswith("Rate limit exceeded")
        assert data["retry_after"] > 0
        assert response.headers["Retry-After"] == str(data["retry_after"])


class TestRateLimitingRegister:
    """Tests for rate limiting on register endpoint."""

    async def test_register_rate_limit_exceeded(self, async_client: AsyncClient):
        """Registration allows 3 requests per minute."""
        for i in range(3):
            response = await async_client.post("/api/auth/register", json={
                "username": f"newuser{i}",
                "email": f"newuser{i}@example.com",
                "password": "secret123",
            })
            assert response.status_code == 201

        response = await async_client.post("/api/auth/register", json={
            "username": "newuser4",
            "email": "newuser4@example.com",
            "password": "secret123",
        })
        assert response.status_code == 429


class TestRateLimitingGenerate:
    async def test_generate_rate_limit_exceeded(self, async_client: AsyncClient, auth_headers: dict):
        """Generation allows 10 requests per minute."""
        from main import app

        app.dependency_overrides[get_generation_client] = QuickGenerationClient

        for i in range(10):
            response = await async_client.post(
                "/api/articles/generate",
                headers=auth_headers,
                json={"topic": f"Topic {i}", "niche": "technology"},
            )
            assert response.status_code == 201

        response = await async_client.post(
            "/api/articles/generate",
            headers=auth_headers,
            json={"topic": "One too many", "niche": "technology"},
        )
        assert response.status_code == 429


class TestRateLimitingDifferentEndpoints:
    """Tests that rate limits are independent per endpoint."""

    async def test_different_endpoints_have_independent_limits(self, async_client: AsyncClient, test_user: User):
        for i in range(5):
            await async_client.post("/api/auth/login", json={
                "email": f"user{i}@example.com",
                "password": "wrongpass"
            })

        response = await async_client.post("/api/auth/login", json={
            "email": "user6@example.com",
            "password": "wrongpass"
        })
        assert response.status_code == 429

        # Registration has its own counter
        response = await async_client.post("/api/auth/register", json={
            "username": "independent",
            "email": "independent@example.com",
            "password": "secret123",
        })
        assert response.status_code == 201
