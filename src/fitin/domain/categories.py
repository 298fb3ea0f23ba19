"""Keyword-based life-domain classification of documents."""

from collections.abc import Iterable
from enum import Enum

from .models import Document


class Category(str, Enum):
    """Life domains documents are grouped into."""

    IDENTITY = "identity"
    HEALTH = "health"
    WORK = "work"
    HOUSING = "housing"
    FORMS = "forms"
    LEGAL = "legal"
    FINANCIAL = "financial"
    OTHER = "other"


# Scan order matters: the first category with a matching trigger wins.
CATEGORY_KEYWORDS: dict[Category, tuple[str, ...]] = {
    Category.IDENTITY: (
        "passport", "passaporto", "identity", "identità", "carta d'identità",
        "id card", "codice fiscale", "tax code", "citizenship", "cittadinanza",
        "birth certificate",
    ),
    Category.HEALTH: (
        "health", "sanitari", "tessera sanitaria", "medical", "medico", "doctor",
        "asl", "ssn", "hospital", "ospedale", "vaccin", "insurance", "assicurazione",
    ),
    Category.WORK: (
        "work", "lavoro", "contract", "contratto", "employment", "payslip",
        "busta paga", "inps", "salary", "stipendio", "employer", "datore",
    ),
    Category.HOUSING: (
        "housing", "residenza", "rent", "affitto", "lease",
        "locazione", "anagrafe", "utility", "bolletta", "casa",
    ),
    Category.FORMS: (
        "form", "modulo", "modello", "application", "domanda", "istanza",
        "kit postale", "request", "richiesta",
    ),
    Category.LEGAL: (
        "permesso", "soggiorno", "visa", "visto", "permit", "questura",
        "prefettura", "court", "tribunale", "legal", "legale", "notice", "ricorso",
    ),
    Category.FINANCIAL: (
        "bank", "banca", "tax", "tasse", "imposte", "agenzia delle entrate",
        "invoice", "fattura", "payment", "pagamento", "bill", "f24", "isee",
    ),
}


def search_corpus(doc: Document) -> str:
    return " ".join([doc.type, doc.name, doc.summary]).lower()


def classify(doc: Document) -> Category:
    """Return the first category whose trigger occurs in the document text."""
    corpus = search_corpus(doc)
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in corpus for keyword in keywords):
            return category
    return Category.OTHER


def group_by_category(docs: Iterable[Document]) -> dict[Category, list[Document]]:
    """Bucket documents by category, keeping input order within buckets.

    Only non-empty buckets are returned, in category declaration order.
    """
    buckets: dict[Category, list[Document]] = {category: [] for category in Category}
    for doc in docs:
        buckets[classify(doc)].append(doc)
    return {category: group for category, group in buckets.items() if group}
