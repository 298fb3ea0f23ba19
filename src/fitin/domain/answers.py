"""Quick answers to fixed questions about the vault.

Every answer is a pure function of the current documents. Documents whose
analysis has not arrived yet are valid input and simply contribute less.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime

from .categories import group_by_category
from .deadlines import DEFAULT_WINDOW_DAYS, upcoming_deadlines
from .models import Document, StepStatus

DEADLINES_CAP = 10
ACTIONS_CAP = 8
TRUNCATED = "...and more"

NO_DOCUMENTS = (
    "You haven't saved any documents yet. Upload and save documents to track "
    "your Italian bureaucracy paperwork."
)
NO_DEADLINES = (
    "No deadlines found in your documents. Upload documents with dates to "
    "track your upcoming deadlines."
)
NO_ACTIONS = (
    "No pending actions found. Your documents either have no action items or "
    "all tasks are completed."
)
NO_URGENT = "No urgent items detected. You're on track with your documentation."
NOTHING_TO_SUMMARIZE = (
    "No documents to summarize. Upload your Italian bureaucracy documents to "
    "get AI-powered summaries."
)
NO_SUMMARIES = (
    "Your documents don't have summaries yet. This may happen with older "
    "documents. Try re-uploading them."
)
NO_PERMESSO = (
    "No Permesso di Soggiorno documents found. Upload your residence permit "
    "documents to track their status."
)
NO_PERMITS = (
    "No visa or permit information found. Upload your visa or permit "
    "documents to identify your status."
)

HOW_TO_USE = """\
FitIn helps you navigate Italian bureaucracy:

1. Upload documents - Scan or upload your Italian documents
2. AI extracts text - We read and understand your documents
3. Get timelines - See deadlines and required steps
4. Save to Vault - Store documents for quick access

Your documents are analyzed to provide personalized answers to these questions."""


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _bullets(lines: Sequence[str], cap: int | None = None) -> str:
    shown = lines if cap is None else lines[:cap]
    text = "\n".join(f"• {line}" for line in shown)
    if cap is not None and len(lines) > cap:
        text += f"\n\n{TRUNCATED}"
    return text


def _unique(items: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(items))


def what_documents(docs: Sequence[Document]) -> str:
    if not docs:
        return NO_DOCUMENTS
    lines = [f"{doc.name} ({doc.effective_category})" for doc in docs]
    return f"You have {_plural(len(docs), 'document')} saved:\n\n{_bullets(lines)}"


def upcoming_deadlines_answer(
    docs: Sequence[Document],
    as_of: date | datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> str:
    """Windowed key dates followed by every step that is not done yet.

    Step dates are free text, so steps are appended rather than merged
    chronologically.
    """
    lines = [
        f"{deadline.label} ({deadline.date.isoformat()})"
        for deadline in upcoming_deadlines(docs, as_of, window_days)
    ]
    for doc in docs:
        lines.extend(
            f"{step.stage}: {step.estimated_date}" for step in doc.timeline if step.is_open
        )

    if not lines:
        return NO_DEADLINES
    return (
        f"Found {_plural(len(lines), 'date')} across your documents:\n\n"
        f"{_bullets(lines, DEADLINES_CAP)}"
    )


def pending_actions(docs: Sequence[Document]) -> str:
    actions: list[str] = []
    for doc in docs:
        if doc.analysis:
            actions.extend(doc.analysis.action_items)
        for step in doc.timeline:
            if step.is_open:
                actions.append(f"{step.stage} - {step.tip}" if step.tip else step.stage)

    actions = _unique(actions)
    if not actions:
        return NO_ACTIONS
    return (
        f"You have {_plural(len(actions), 'action')} to complete:\n\n"
        f"{_bullets(actions, ACTIONS_CAP)}"
    )


def urgent_items(docs: Sequence[Document]) -> str:
    items = [
        f"{step.stage} - {step.estimated_date} ({doc.name})"
        for doc in docs
        for step in doc.timeline
        if step.status is StepStatus.URGENT
    ]
    if not items:
        return NO_URGENT
    return f"You have {_plural(len(items), 'urgent item')}:\n\n{_bullets(items)}"


def summaries(docs: Sequence[Document]) -> str:
    if not docs:
        return NOTHING_TO_SUMMARIZE
    parts = [f"{doc.name}\n{doc.summary}" for doc in docs if doc.summary]
    if not parts:
        return NO_SUMMARIES
    return "\n\n".join(parts)


def is_permesso_related(doc: Document) -> bool:
    category = doc.analysis.category.lower() if doc.analysis else ""
    return (
        "permesso" in doc.name.lower()
        or "permesso" in category
        or "residence" in category
        or "permit" in doc.type.lower()
    )


def permesso_status(docs: Sequence[Document]) -> str:
    """Status of residence permit paperwork, based on the newest match.

    Documents are expected newest-first, as the store lists them.
    """
    related = [doc for doc in docs if is_permesso_related(doc)]
    if not related:
        return NO_PERMESSO

    latest = related[0]
    status = f"Found {_plural(len(related), 'related document')}.\n\nLatest: {latest.name}\n"
    if latest.summary:
        status += f"{latest.summary}\n"
    pending = [step.stage for step in latest.timeline if step.is_open]
    if pending:
        status += f"\nPending steps: {', '.join(pending)}"
    return status


def permit_types(docs: Sequence[Document]) -> str:
    categories = _unique([doc.effective_category for doc in docs if doc.effective_category])
    if not categories:
        return NO_PERMITS
    return f"Based on your documents, you have:\n\n{_bullets(categories)}"


def category_summary(docs: Sequence[Document]) -> str:
    if not docs:
        return NO_DOCUMENTS
    groups = group_by_category(docs)
    lines = [
        f"{category.value}: {_plural(len(group), 'document')}"
        for category, group in groups.items()
    ]
    return f"Your documents by area:\n\n{_bullets(lines)}"


def how_to_use() -> str:
    return HOW_TO_USE


@dataclass(frozen=True)
class FAQItem:
    id: str
    question: str
    section: str  # documents | deadlines | process | general
    answer: Callable[[Sequence[Document], date, int], str]


FAQ: tuple[FAQItem, ...] = (
    FAQItem(
        "what-docs", "What documents do I have stored?", "documents",
        lambda docs, as_of, window_days: what_documents(docs),
    ),
    FAQItem(
        "upcoming-deadlines", "What are my upcoming deadlines?", "deadlines",
        upcoming_deadlines_answer,
    ),
    FAQItem(
        "pending-actions", "What actions do I need to take?", "process",
        lambda docs, as_of, window_days: pending_actions(docs),
    ),
    FAQItem(
        "doc-summaries", "Can you summarize my documents?", "documents",
        lambda docs, as_of, window_days: summaries(docs),
    ),
    FAQItem(
        "urgent-items", "Do I have any urgent items?", "deadlines",
        lambda docs, as_of, window_days: urgent_items(docs),
    ),
    FAQItem(
        "permesso-status", "What is the status of my Permesso di Soggiorno?", "process",
        lambda docs, as_of, window_days: permesso_status(docs),
    ),
    FAQItem(
        "visa-info", "What visa/permit type do I have?", "documents",
        lambda docs, as_of, window_days: permit_types(docs),
    ),
    FAQItem(
        "by-category", "How are my documents organized?", "documents",
        lambda docs, as_of, window_days: category_summary(docs),
    ),
    FAQItem(
        "how-to-use", "How do I use this app?", "general",
        lambda docs, as_of, window_days: how_to_use(),
    ),
)

SECTIONS = ("documents", "deadlines", "process", "general")


def faq_for_section(section: str | None = None) -> list[FAQItem]:
    if section is None:
        return list(FAQ)
    return [item for item in FAQ if item.section == section]


def answer_question(
    question_id: str,
    docs: Sequence[Document],
    as_of: date,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> str:
    """Answer one FAQ entry. Raises KeyError for unknown ids."""
    for item in FAQ:
        if item.id == question_id:
            return item.answer(docs, as_of, window_days)
    raise KeyError(question_id)
