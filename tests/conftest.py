"""Shared pytest fixtures and configuration for all tests."""

import os

import pytest

# Keep src/main.py from building the real application at import time
os.environ.setdefault("ENVIRONMENT", "test")


@pytest.fixture
def dish_record() -> dict:
    """Fixture providing a dish row as returned by the database."""
    return {
        "id": "0b6f7c1e-3f7a-4a58-9c55-2f1f3f0d9a11",
        "title": "Seared Salmon",
        "description": "Atlantic salmon with lemon butter",
        "category": "mains",
        "image_url": "https://example.com/salmon.jpg",
        "price": 24.5,
        "ingredients": ["salmon", "lemon", "butter"],
        "is_featured": True,
        "is_available": True,
        "created_at": "2024-01-15T10:30:00+00:00",
        "updated_at": "2024-01-15T10:30:00+00:00",
    }


@pytest.fixture
def dish_records(dish_record: dict) -> list[dict]:
    """Fixture providing a small catalog of dish rows."""
    return [
        dish_record,
        {
            "id": "5d3c0a4e-8b8f-4c3e-9a57-7c1f2b6e4d22",
            "title": "Crispy Calamari",
            "description": "Lightly fried squid with aioli",
            "category": "appetizers",
            "image_url": None,
            "price": 12,
            "ingredients": None,
            "is_featured": False,
            "is_available": True,
            "created_at": "2024-01-14T09:00:00+00:00",
            "updated_at": "2024-01-14T09:00:00+00:00",
        },
        {
            "id": "9a1e2d3c-4b5a-4f6e-8d7c-6b5a4f3e2d33",
            "title": "Chocolate Torte",
            "description": "Flourless dark chocolate torte",
            "category": "desserts",
            "image_url": None,
            "price": None,
            "ingredients": ["chocolate", "eggs"],
            "is_featured": False,
            "is_available": False,
            "created_at": "2024-01-13T18:45:00+00:00",
            "updated_at": "2024-01-13T18:45:00+00:00",
        },
    ]


@pytest.fixture
def contact_record() -> dict:
    """Fixture providing a contact message row as returned by the database."""
    return {
        "id": "c2a7e9b4-1d3f-4e5a-8b6c-0d9e8f7a6b44",
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
        "event_type": "wedding",
        "guests": 120,
        "preferred_date": "2024-06-01",
        "message": "Do you cater weddings?",
        "status": "new",
        "created_at": "2024-01-15T10:30:00+00:00",
        "updated_at": "2024-01-15T10:30:00+00:00",
    }
