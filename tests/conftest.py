from typing import Any

import pytest


@pytest.fixture()
def corolla_listing() -> dict[str, Any]:
    """A listing that satisfies every required-field constraint."""
    return {
        "make": "Toyota",
        "model": "Corolla",
        "year": 2019,
        "mileage": 40000,
        "price": 12000,
    }
