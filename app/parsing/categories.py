from app.parsing.models import TransactionType

DEFAULT_CATEGORY = "SIN_CATEGORIA"

# Evaluated top to bottom; the first bucket with a matching keyword wins.
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "RESTAURANTES",
        (
            "restaurante", "pizza", "burger", "comida", "cafe", "starbucks",
            "mc donald", "frisby", "dominos", "juan vald", "coffee",
        ),
    ),
    ("SUPERMERCADOS", ("exito", "carulla", "mercado", "super", "homecenter", "alkosto")),
    (
        "TRANSPORTE",
        ("uber", "taxi", "parking", "peaje", "gasolina", "ecopetrol", "eds", "combustible"),
    ),
    (
        "SALUD",
        (
            "farmacia", "drogueria", "clinica", "hospital", "colmedica",
            "farmatodo", "cruz verde",
        ),
    ),
    (
        "TECNOLOGIA",
        (
            "amazon", "google", "apple", "microsoft", "netflix", "spotify",
            "openai", "github", "cloudflare", "aws",
        ),
    ),
    ("ENTRETENIMIENTO", ("cine", "teatro", "juego", "gimnasio", "fitness", "deporte", "sporty")),
    (
        "SERVICIOS",
        (
            "telefon", "internet", "luz", "agua", "gas", "movistar", "claro",
            "une", "starlink",
        ),
    ),
    ("HOGAR", ("homecenter", "ferreteria", "mueble", "decoracion")),
    ("EDUCACION", ("universidad", "colegio", "curso", "libro")),
    ("VIAJES", ("hotel", "aero", "avianca", "latam", "viaje")),
    ("OTROS_SERVICIOS", ("rappi", "payu", "pago")),
)

# Credit/debit inference is a keyword heuristic tuned for card statements:
# anything that does not look like a payment or reversal is an expense.
CREDIT_KEYWORDS: tuple[str, ...] = (
    "pago",
    "abono",
    "reversion",
    "reversión",
    "payment",
    "credit",
    "reversal",
)


def categorize(merchant: str) -> str:
    lowered = merchant.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def infer_type(merchant: str) -> TransactionType:
    lowered = merchant.lower()
    if any(keyword in lowered for keyword in CREDIT_KEYWORDS):
        return TransactionType.CREDIT
    return TransactionType.DEBIT
