"""
Test configuration and fixtures for the realty site API.
Provides app and client fixtures, storage backends, and test data factories.
"""

import pytest
from decimal import Decimal
from typing import AsyncGenerator, Generator
from fastapi import FastAPI
from fastapi.testclient import TestClient

from realty.config import Settings
from realty.main import create_app
from realty.storage import MemoryStorage, SQLStorage, Storage

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Admin#2024pass"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Testing settings with memory backends and a throwaway upload dir."""
    return Settings(
        environment="testing",
        storage_backend="memory",
        session_store="memory",
        session_secret="test-session-secret",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        admin_name="Test Admin",
        upload_dir=str(tmp_path / "uploads"),
        upload_mode="disk",
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Create a fresh application for each test."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client with the lifespan running, so the admin account exists."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_client(client: TestClient) -> TestClient:
    """Test client holding the session cookie of the bootstrapped admin."""
    response = client.post("/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


# Storage fixtures
@pytest.fixture
async def memory_storage() -> AsyncGenerator[MemoryStorage, None]:
    """Create an in-memory storage backend."""
    storage = MemoryStorage()
    await storage.initialize()
    yield storage
    await storage.close()


@pytest.fixture
async def sqlite_storage(tmp_path) -> AsyncGenerator[SQLStorage, None]:
    """Create a SQLite storage backend on a temporary file."""
    storage = SQLStorage(f"sqlite+aiosqlite:///{tmp_path / 'data' / 'test.db'}")
    await storage.initialize()
    yield storage
    await storage.close()


@pytest.fixture(params=["memory", "sqlite"])
async def storage(request, tmp_path) -> AsyncGenerator[Storage, None]:
    """Run the test once per storage backend."""
    if request.param == "memory":
        backend = MemoryStorage()
    else:
        backend = SQLStorage(f"sqlite+aiosqlite:///{tmp_path / 'storage.db'}")
    await backend.initialize()
    yield backend
    await backend.close()


# Test data factories
class PropertyFactory:
    """Factory for property payloads."""

    @staticmethod
    def create_property_data(
        title: str = "Apartamento T3 no Talatona",
        price: Decimal = Decimal("45000000.00"),
        city_id: str = "city-luanda",
        category_id: str = "cat-apartamentos",
        bedrooms: int = 3,
        status: str = "available",
        featured: bool = False,
        **overrides
    ) -> dict:
        """Create property data dictionary."""
        data = {
            "title": title,
            "description": "Apartamento com vista para o mar",
            "price": price,
            "city_id": city_id,
            "category_id": category_id,
            "bedrooms": bedrooms,
            "bathrooms": 2,
            "area": 120,
            "images": [],
            "status": status,
            "featured": featured,
        }
        data.update(overrides)
        return data

    @staticmethod
    def create_property_json(**kwargs) -> dict:
        """Property payload with the price as a string, ready to send as JSON."""
        data = PropertyFactory.create_property_data(**kwargs)
        data["price"] = str(data["price"])
        return data


class ContentFactory:
    """Factory for site content payloads."""

    @staticmethod
    def create_category_data(name: str = "Apartamentos", slug: str = "apartamentos", display_order: int = 0) -> dict:
        return {
            "name": name,
            "slug": slug,
            "image_url": f"/uploads/images/{slug}.jpg",
            "display_order": display_order,
        }

    @staticmethod
    def create_city_data(name: str = "Luanda", slug: str = "luanda", display_order: int = 0) -> dict:
        return {
            "name": name,
            "slug": slug,
            "image_url": f"/uploads/images/{slug}.jpg",
            "display_order": display_order,
        }

    @staticmethod
    def create_project_data(title: str = "Edifício Kilamba Sul", status: str = "in-progress") -> dict:
        return {
            "title": title,
            "description": "Edifício residencial de 12 pisos",
            "area": 5400,
            "duration": "18 meses",
            "units": "48 apartamentos",
            "year": "2024",
            "status": status,
        }

    @staticmethod
    def create_condominium_data(name: str = "Condomínio Vila Verde", **overrides) -> dict:
        data = {
            "name": name,
            "description": "Condomínio fechado com segurança 24h",
            "location": "Talatona",
            "centrality_or_district": "Belas",
            "total_units": 100,
            "completed_units": 60,
            "available_units": 25,
            "price_range": "50M - 150M AKZ",
            "amenities": ["Piscina", "Ginásio"],
            "development_year": "2023",
        }
        data.update(overrides)
        return data

    @staticmethod
    def create_contact_data(email: str = "Joao@Example.com") -> dict:
        return {
            "name": "João Silva",
            "email": email,
            "phone": "+244 923 000 000",
            "subject": "Visita ao apartamento",
            "message": "Gostaria de agendar uma visita.",
        }

    @staticmethod
    def create_employee_data(name: str = "Maria Santos", display_order: int = 0) -> dict:
        return {
            "name": name,
            "position": "Consultora Imobiliária",
            "department": "imobiliario",
            "email": "maria@example.com",
            "display_order": display_order,
        }

    @staticmethod
    def create_about_data(company_type: str = "construtora", display_order: int = 0) -> dict:
        return {
            "company_type": company_type,
            "title": "Sobre a construtora",
            "description": "Mais de 20 anos a construir Angola",
            "values": ["Qualidade", "Confiança"],
            "display_order": display_order,
        }
