import json
from pathlib import Path

import pandas as pd
import pytest

from placerank.recommendations import data_store
from placerank.recommendations.data_store import CATALOG_COLUMNS
from placerank.recommendations.quota import clear_usage

TORTONI_ID = "0b5c6f3e-1c2d-4e5f-8a9b-0c1d2e3f4a5b"
GUERRIN_ID = "1a2b3c4d-5e6f-4a7b-8c9d-0e1f2a3b4c5d"
GUERRIN_BARE_ID = "2b3c4d5e-6f7a-4b8c-9d0e-1f2a3b4c5d6e"
PAPAGAYO_ID = "3c4d5e6f-7a8b-4c9d-8e1f-2a3b4c5d6e7f"
PEPE_ID = "4d5e6f7a-8b9c-4d0e-9f2a-3b4c5d6e7f8a"
CUERVO_ID = "5e6f7a8b-9c0d-4e1f-8a3b-4c5d6e7f8a9b"
ALVEAR_ID = "6f7a8b9c-0d1e-4f2a-9b4c-5d6e7f8a9b0c"

CATALOG_ROWS = [
    {
        "id": TORTONI_ID,
        "nombre": "Café Tortoni",
        "direccion": "Av. de Mayo 825, C1084 CABA, Argentina",
        "pais": "AR",
        "lat": -34.6087,
        "lng": -58.3787,
        "google_maps_url": "https://maps.google.com/?cid=111",
        "five_star_rating_published": 5,
        "tipo_comida": "Café",
        "review_text_published": "Café histórico, ambiente tranquilo y hermoso.",
        "fecha_resena": "2024-05-01",
        "questions": json.dumps(
            [
                {"question": "Tipo de comida", "selected_option": "Café"},
                {"question": "Nivel de ruido", "selected_option": "Bajo"},
            ],
            ensure_ascii=False,
        ),
    },
    {
        "id": GUERRIN_ID,
        "nombre": "Pizzería Güerrín",
        "direccion": "Av. Corrientes 1368, C1043 CABA, Argentina",
        "pais": "AR",
        "lat": -34.6040,
        "lng": -58.3860,
        "five_star_rating_published": 4,
        "tipo_comida": "Pizzería",
        "review_text_published": "La mejor pizza de muzzarella, siempre lleno.",
        "fecha_resena": "2024-03-10",
    },
    {
        "id": GUERRIN_BARE_ID,
        "nombre": "Pizzeria Guerrin",
        "direccion": "Av. Corrientes 1368, C1043 CABA, Argentina",
        "pais": "AR",
    },
    {
        "id": PAPAGAYO_ID,
        "nombre": "El Papagayo",
        "direccion": "Arturo M. Bas 69, X5000 Córdoba, Argentina",
        "pais": "AR",
        "lat": -31.4167,
        "lng": -64.1888,
        "five_star_rating_published": 4.5,
        "review_text_published": "Cocina de autor, ambiente tranquilo.",
    },
    {
        "id": PEPE_ID,
        "nombre": "Bar Pepe",
        "direccion": "Calle Mayor 1, 28013 Madrid, España",
        "pais": "ES",
        "lat": 40.4168,
        "lng": -3.7038,
        "five_star_rating_published": 4.2,
        "review_text_published": "Buen vino y tapas, precio accesible.",
    },
    {
        "id": CUERVO_ID,
        "nombre": "Cuervo Café",
        "direccion": "El Salvador 4580, C1414 Cdad. Autónoma de Buenos Aires, Argentina",
        "pais": "AR",
        "lat": -34.5880,
        "lng": -58.4260,
        "five_star_rating_published": 4.7,
        "review_text_published": "Café de especialidad excelente, buen wifi para trabajar.",
    },
    {
        "id": ALVEAR_ID,
        "nombre": "Alvear Palace Hotel",
        "direccion": "Av. Alvear 1891, C1129 CABA, Argentina",
        "pais": "AR",
        "lat": -34.5880,
        "lng": -58.3900,
        "five_star_rating_published": 4.9,
        "review_text_published": "Un clásico, el té de la tarde es excelente.",
    },
]


@pytest.fixture
def catalog_csv(tmp_path: Path, monkeypatch) -> Path:
    path = tmp_path / "lugares.csv"
    pd.DataFrame(CATALOG_ROWS, columns=CATALOG_COLUMNS).to_csv(path, index=False)
    monkeypatch.setenv("PLACERANK_CATALOG_PATH", str(path))
    data_store.reset_catalog()
    yield path
    data_store.reset_catalog()


@pytest.fixture(autouse=True)
def _reset_quota():
    clear_usage()
    yield
    clear_usage()
