"""Static lookup tables for query expansion. Loaded once, never mutated."""
from __future__ import annotations

from types import MappingProxyType

SEMANTIC_MAP = MappingProxyType({
    "pet friendly": ("perro", "perros", "mascota", "mascotas", "pet friendly", "pet-friendly", "dog friendly"),
    "para perros": ("perro", "perros", "mascota", "mascotas", "pet friendly"),
    "tranquilo": ("tranquilo", "tranquila", "silencioso", "calmado", "relajado", "íntimo", "intimo"),
    "silencioso": ("tranquilo", "tranquila", "silencioso", "calmado"),
    "movido": ("movido", "música", "musica", "animado", "vivo", "fiesta"),
    "wifi": ("wifi", "internet", "trabajar", "trabajo", "laptop", "enchufe", "conexión", "conexion"),
    "para trabajar": ("wifi", "internet", "trabajar", "laptop", "enchufe"),
    "para estudiar": ("wifi", "internet", "estudiar", "laptop", "tranquilo"),
    "reservar": ("reservar", "reserva", "reservación", "lleno", "espera"),
    "terraza": ("terraza", "afuera", "exterior", "aire libre", "jardín", "jardin", "patio", "vereda"),
    "al aire libre": ("terraza", "afuera", "exterior", "jardín", "patio", "vereda"),
    "romántico": ("romántico", "romantico", "pareja", "cita", "intimidad"),
    "para una cita": ("romántico", "romantico", "pareja", "cita", "intimidad"),
    "familiar": ("familiar", "niños", "chicos", "kids"),
    "con niños": ("familiar", "niños", "chicos", "kids"),
    "barato": ("económico", "economico", "barato", "accesible", "buen precio"),
    "económico": ("económico", "economico", "barato", "accesible", "buen precio"),
    "sin tacc": ("sin tacc", "celíaco", "celiaco", "gluten free", "sin gluten"),
    "vegano": ("vegano", "vegana", "vegan", "plant based", "vegetariano"),
    "vegetariano": ("vegetariano", "vegetariana", "vegano", "plant based"),
    "desayuno": ("desayuno", "breakfast", "tostadas", "medialuna", "café con leche", "croissant"),
    "brunch": ("brunch",),
    "almuerzo": ("almuerzo", "lunch", "menú del día"),
    "cena": ("cena", "dinner", "cenar", "noche"),
    "café": ("café", "cafe", "coffee", "especialidad"),
    "café de especialidad": ("café", "especialidad", "specialty", "barista", "filtrado"),
    "sushi": ("sushi", "japonés", "japonesa", "nikkei", "sashimi", "ramen"),
    "pizza": ("pizza", "pizzería", "pizzeria", "napolitana"),
    "hamburguesa": ("hamburguesa", "burger", "smash"),
    "pasta": ("pasta", "pastas", "trattoria", "italiano", "italiana"),
    "tacos": ("tacos", "taquería", "mexicano", "mexicana"),
    "helado": ("helado", "gelato", "heladería"),
    "empanadas": ("empanadas", "empanada"),
    "parrilla": ("parrilla", "asado", "bife", "argentino"),
    "bodegón": ("bodegón", "bodegon", "cantina", "casero"),
    "bar": ("bar", "wine bar", "copa", "vino", "vermú", "vermu"),
    "wine bar": ("wine bar", "vino", "copa", "natural wine"),
    "cerveza": ("cerveza", "birra", "craft", "artesanal"),
})

DISH_SYNONYM_GROUPS: tuple[tuple[str, ...], ...] = (
    ("medialuna", "medialunas", "croissant", "factura", "facturas", "viennoiserie"),
    ("hamburguesa", "hamburguesas", "burger", "burgers", "smash"),
    ("papas fritas", "papas", "fries", "fritas"),
    ("cafe", "cafes", "coffee", "cafeteria"),
    ("helado", "helados", "gelato"),
    ("empanada", "empanadas"),
    ("taco", "tacos", "taqueria", "taquerias"),
    ("pizza", "pizzas", "muzza", "muzzarella", "napolitana"),
    ("pasta", "pastas", "fideos", "spaghetti", "ravioles"),
    ("sushi", "sashimi", "nigiri", "maki"),
)

# Trailing country names stripped from "... en <city>" query hints.
QUERY_COUNTRY_SUFFIXES: tuple[str, ...] = (
    "argentina", "spain", "espana", "italia", "francia", "uk", "usa", "eeuu",
)
