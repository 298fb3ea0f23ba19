"""Unit tests for quick answers."""

from datetime import date

import pytest

from fitin.domain import answers
from fitin.domain.answers import (
    FAQ,
    answer_question,
    category_summary,
    faq_for_section,
    pending_actions,
    permesso_status,
    permit_types,
    summaries,
    upcoming_deadlines_answer,
    urgent_items,
    what_documents,
)
from fitin.domain.models import Analysis, StepStatus, StructuredKeyDate, TimelineStep

AS_OF = date(2025, 1, 1)


class TestWhatDocuments:
    def test_empty(self) -> None:
        assert what_documents([]) == answers.NO_DOCUMENTS

    def test_lists_effective_category(self, make_document) -> None:
        docs = [
            make_document(name="Permesso", type="image/png",
                          analysis=Analysis(category="Residence Permit")),
            make_document(name="Scan", type="Document"),
        ]
        text = what_documents(docs)
        assert text.startswith("You have 2 documents saved:")
        assert "• Permesso (Residence Permit)" in text
        assert "• Scan (Document)" in text

    def test_singular(self, make_document) -> None:
        assert what_documents([make_document()]).startswith("You have 1 document saved:")


class TestUpcomingDeadlinesAnswer:
    def test_combines_key_dates_and_open_steps(self, make_document, sample_analysis,
                                               sample_timeline) -> None:
        doc = make_document(name="Permesso", analysis=sample_analysis, timeline=sample_timeline)
        text = upcoming_deadlines_answer([doc], AS_OF)

        assert "• Appuntamento questura 2025-01-10 (2025-01-10)" in text
        assert "• Rinnovo (2025-02-01)" in text
        assert "• Fingerprinting: in 2 weeks" in text
        assert "• Collect permit: in 2 months" in text
        assert "Send kit postale" not in text
        assert text.startswith("Found 4 dates")
        # Key dates come first, in chronological order
        assert text.index("Appuntamento") < text.index("Rinnovo") < text.index("Fingerprinting")

    def test_empty(self, make_document) -> None:
        assert upcoming_deadlines_answer([], AS_OF) == answers.NO_DEADLINES
        done = [TimelineStep("x", "y", StepStatus.DONE)]
        assert upcoming_deadlines_answer([make_document(timeline=done)], AS_OF) == answers.NO_DEADLINES

    def test_truncates_after_ten(self, make_document) -> None:
        steps = [TimelineStep(f"Step {i}", "soon") for i in range(12)]
        text = upcoming_deadlines_answer([make_document(timeline=steps)], AS_OF)
        assert text.startswith("Found 12 dates")
        assert "• Step 9: soon" in text
        assert "Step 10" not in text
        assert text.endswith(answers.TRUNCATED)

    def test_no_marker_at_cap(self, make_document) -> None:
        steps = [TimelineStep(f"Step {i}", "soon") for i in range(10)]
        text = upcoming_deadlines_answer([make_document(timeline=steps)], AS_OF)
        assert answers.TRUNCATED not in text


class TestPendingActions:
    def test_dedup_across_documents(self, make_document) -> None:
        docs = [
            make_document(name="A", analysis=Analysis(action_items=["Pay the bollettino"])),
            make_document(name="B", analysis=Analysis(action_items=["Pay the bollettino", "Book"])),
        ]
        text = pending_actions(docs)
        assert text.count("Pay the bollettino") == 1
        assert text.startswith("You have 2 actions to complete:")
        assert text.index("Pay the bollettino") < text.index("Book")

    def test_includes_open_steps_with_tips(self, make_document, sample_timeline) -> None:
        text = pending_actions([make_document(timeline=sample_timeline)])
        assert "• Fingerprinting - Arrive early" in text
        assert "• Collect permit" in text
        assert "Send kit postale" not in text

    def test_truncates_after_eight(self, make_document) -> None:
        actions = [f"Action {i}" for i in range(9)]
        text = pending_actions([make_document(analysis=Analysis(action_items=actions))])
        assert "Action 7" in text
        assert "Action 8" not in text
        assert text.endswith(answers.TRUNCATED)

    def test_empty(self, make_document) -> None:
        assert pending_actions([]) == answers.NO_ACTIONS
        assert pending_actions([make_document()]) == answers.NO_ACTIONS


class TestUrgentItems:
    def test_lists_urgent_steps_only(self, make_document, sample_timeline) -> None:
        text = urgent_items([make_document(name="Permesso", timeline=sample_timeline)])
        assert text.startswith("You have 1 urgent item:")
        assert "• Fingerprinting - in 2 weeks (Permesso)" in text
        assert "Collect permit" not in text

    def test_not_capped(self, make_document) -> None:
        steps = [TimelineStep(f"Step {i}", "now", StepStatus.URGENT) for i in range(15)]
        text = urgent_items([make_document(timeline=steps)])
        assert "Step 14" in text
        assert answers.TRUNCATED not in text

    def test_empty(self, make_document) -> None:
        assert urgent_items([make_document()]) == answers.NO_URGENT


class TestSummaries:
    def test_skips_documents_without_summary(self, make_document) -> None:
        docs = [
            make_document(name="A", analysis=Analysis(summary="First summary.")),
            make_document(name="B"),
            make_document(name="C", analysis=Analysis(summary="Third summary.")),
        ]
        assert summaries(docs) == "A\nFirst summary.\n\nC\nThird summary."

    def test_distinct_empty_messages(self, make_document) -> None:
        no_docs = what_documents([])
        no_summaries = summaries([make_document(analysis=Analysis())])
        assert no_docs and no_summaries
        assert no_docs != no_summaries
        assert no_summaries == answers.NO_SUMMARIES
        assert summaries([]) == answers.NOTHING_TO_SUMMARIZE


class TestPermessoStatus:
    def test_latest_related_document(self, make_document, sample_analysis, sample_timeline) -> None:
        docs = [
            make_document(name="Ricevuta", analysis=sample_analysis, timeline=sample_timeline),
            make_document(name="Permesso vecchio"),
            make_document(name="Busta paga"),
        ]
        text = permesso_status(docs)
        assert text.startswith("Found 2 related documents.")
        assert "Latest: Ricevuta" in text
        assert sample_analysis.summary in text
        assert "Pending steps: Fingerprinting, Collect permit" in text

    def test_matches_permit_type(self, make_document) -> None:
        assert "Latest: Scan" in permesso_status([make_document(name="Scan", type="Work Permit")])

    def test_none(self, make_document) -> None:
        assert permesso_status([make_document(name="Busta paga")]) == answers.NO_PERMESSO


class TestPermitTypes:
    def test_unique_categories(self, make_document) -> None:
        docs = [
            make_document(type="Visa"),
            make_document(type="Identity Document"),
            make_document(type="Visa"),
        ]
        assert permit_types(docs) == (
            "Based on your documents, you have:\n\n• Visa\n• Identity Document"
        )

    def test_empty(self, make_document) -> None:
        assert permit_types([make_document(type="")]) == answers.NO_PERMITS


class TestCategorySummary:
    def test_counts_per_category(self, make_document) -> None:
        docs = [make_document(name="Passport"), make_document(name="Passaporto"),
                make_document(name="Busta paga")]
        text = category_summary(docs)
        assert "• identity: 2 documents" in text
        assert "• work: 1 document" in text

    def test_empty(self) -> None:
        assert category_summary([]) == answers.NO_DOCUMENTS


class TestFAQ:
    def test_ids_unique(self) -> None:
        ids = [item.id for item in FAQ]
        assert len(ids) == len(set(ids))

    def test_sections(self) -> None:
        assert {item.section for item in FAQ} <= set(answers.SECTIONS)
        assert [item.id for item in faq_for_section("deadlines")] == [
            "upcoming-deadlines",
            "urgent-items",
        ]
        assert faq_for_section(None) == list(FAQ)

    @pytest.mark.parametrize("item", FAQ, ids=lambda item: item.id)
    def test_every_answer_handles_empty_vault(self, item) -> None:
        assert answer_question(item.id, [], AS_OF)

    def test_dispatch(self, make_document) -> None:
        doc = make_document(name="Permesso")
        assert answer_question("what-docs", [doc], AS_OF) == what_documents([doc])

    def test_dispatch_passes_window(self, make_document, sample_analysis) -> None:
        doc = make_document(name="Permesso", analysis=sample_analysis)
        assert "Rinnovo" in answer_question("upcoming-deadlines", [doc], AS_OF)
        assert "Rinnovo" not in answer_question("upcoming-deadlines", [doc], AS_OF, window_days=20)

    def test_unknown_question(self) -> None:
        with pytest.raises(KeyError):
            answer_question("nope", [], AS_OF)

    def test_does_not_mutate_documents(self, make_document, sample_analysis,
                                       sample_timeline) -> None:
        doc = make_document(analysis=sample_analysis, timeline=list(sample_timeline))
        before = doc.to_dict()
        for item in FAQ:
            answer_question(item.id, [doc], AS_OF)
        assert doc.to_dict() == before
