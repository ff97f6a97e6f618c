"""Unit tests for the label catalog."""

import pytest
from pydantic import ValidationError

from src.labeler.labels.catalog import (
    DEFAULT_LABELS,
    TYPE_LABELS,
    LabelCatalog,
    LabelDefinition,
)


class TestLabelDefinition:

    def test_valid_definition(self):
        definition = LabelDefinition(label="bug", description="Something isn't working")
        assert definition.label == "bug"

    @pytest.mark.parametrize("label, description", [("", "x"), ("x", ""), ("  ", "x")])
    def test_blank_fields_rejected(self, label, description):
        with pytest.raises(ValidationError):
            LabelDefinition(label=label, description=description)


class TestLabelCatalog:

    def test_build_orders_defaults_then_types_then_custom(self):
        custom = LabelDefinition(label="area/ui", description="User interface")

        catalog = LabelCatalog.build([custom])

        assert catalog.names == [
            "bug",
            "enhancement",
            "documentation",
            "help wanted",
            "question",
            "Bug",
            "Feature",
            "Task",
            "area/ui",
        ]

    def test_build_without_custom_labels(self):
        catalog = LabelCatalog.build()

        assert len(catalog) == len(DEFAULT_LABELS) + len(TYPE_LABELS) == 8

    def test_type_labels_describe_their_type(self):
        assert [d.description for d in TYPE_LABELS] == [
            "Issue type: Bug",
            "Issue type: Feature",
            "Issue type: Task",
        ]

    def test_duplicates_kept_at_construction(self):
        duplicate = LabelDefinition(label="BUG", description="Shouting bug")

        catalog = LabelCatalog.build([duplicate])

        assert catalog.names.count("BUG") == 1
        assert catalog.names.count("bug") == 1
        assert len(catalog) == 9

    def test_contains_ignores_case(self):
        catalog = LabelCatalog.build()

        assert catalog.contains("BUG")
        assert catalog.contains("Help Wanted")
        assert catalog.contains("task")
        assert not catalog.contains("urgent")
