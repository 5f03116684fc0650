import json
from datetime import date

from taskboard.ui.preview import NO_DUE_DATE_LABEL, description_preview, group_by_due_date

from .fakes import make_task


def rich_text(*paragraphs):
    return json.dumps(
        {
            f"block-{i}": {"id": f"block-{i}", "type": "Paragraph", "value": [{"type": "paragraph", "children": [{"text": p}]}]}
            for i, p in enumerate(paragraphs)
        }
    )


class TestDescriptionPreview:
    def test_blank(self):
        assert description_preview(None) == "—"
        assert description_preview("   ") == "—"

    def test_plain_text(self):
        assert description_preview("Milk, eggs") == "Milk, eggs"

    def test_plain_text_truncated(self):
        assert description_preview("a" * 130) == "a" * 120 + "…"

    def test_rich_text_joined(self):
        assert description_preview(rich_text("First", "Second")) == "First Second"

    def test_rich_text_without_text_nodes(self):
        assert description_preview(json.dumps({"b": {"value": [{"children": [{"text": ""}]}]}})) == "—"

    def test_rich_text_truncated(self):
        assert description_preview(rich_text("x" * 200), max_len=10) == "x" * 10 + "…"

    def test_json_that_is_not_a_document_is_plain_text(self):
        assert description_preview("[1, 2]") == "[1, 2]"
        assert description_preview("42") == "42"


class TestGroupByDueDate:
    def test_groups_sorted_with_undated_last(self):
        tasks = [
            make_task(1),
            make_task(2, due_date=date(2030, 5, 1)),
            make_task(3, due_date=date(2030, 1, 1)),
            make_task(4, due_date=date(2030, 5, 1)),
            make_task(5),
        ]
        groups = group_by_due_date(tasks)
        assert [label for label, _ in groups] == ["2030-01-01", "2030-05-01", NO_DUE_DATE_LABEL]
        assert [[t.id for t in items] for _, items in groups] == [
            ["task-3"],
            ["task-2", "task-4"],
            ["task-1", "task-5"],
        ]

    def test_empty(self):
        assert group_by_due_date([]) == []
