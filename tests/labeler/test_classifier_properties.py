"""Property-based tests for classification output validation.

Verifies that the classification schema accepts exactly the three issue
types and rejects any other type value.

Testing Configuration:
- Library: Hypothesis (Python)
"""

from typing import List

import pytest
from hypothesis import given, settings, strategies as st
from pydantic import ValidationError

from src.labeler.classifier.agent import ClassificationError, _validate_response
from src.labeler.classifier.models import ISSUE_TYPES, IssueClassification


label_names = st.lists(st.text(min_size=1, max_size=20), max_size=8)


class TestClassificationOutputValidation:
    """Property: the type field is always one of Bug, Feature, Task."""

    @given(
        labels=label_names,
        issue_type=st.sampled_from(ISSUE_TYPES),
        reasoning=st.text(max_size=100),
    )
    @settings(max_examples=100)
    def test_valid_payload_round_trips(
        self, labels: List[str], issue_type: str, reasoning: str
    ) -> None:
        payload = {"labels": labels, "type": issue_type, "reasoning": reasoning}

        classification = _validate_response({"parsed": payload})

        assert classification.type in ISSUE_TYPES
        assert classification.labels == labels
        assert classification.to_dict() == payload

    @given(
        issue_type=st.text(max_size=20).filter(lambda t: t not in ISSUE_TYPES),
    )
    @settings(max_examples=100)
    def test_unknown_type_rejected(self, issue_type: str) -> None:
        with pytest.raises(ValidationError):
            IssueClassification(labels=[], type=issue_type, reasoning="r")

        with pytest.raises(ClassificationError):
            _validate_response(
                {"parsed": {"labels": [], "type": issue_type, "reasoning": "r"}}
            )

    @given(missing=st.sampled_from(["labels", "type", "reasoning"]))
    @settings(max_examples=20)
    def test_missing_field_rejected(self, missing: str) -> None:
        payload = {"labels": ["bug"], "type": "Bug", "reasoning": "r"}
        del payload[missing]

        with pytest.raises(ClassificationError):
            _validate_response({"parsed": payload})
