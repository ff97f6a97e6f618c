"""Label catalog, provisioning and application.

This package owns everything the labeler does with repository labels:
- Building the catalog of default, type and custom labels
- Creating catalog labels missing from the repository
- Filtering classifier suggestions and writing them to the issue
"""

from src.labeler.labels.applier import (
    LabelingResult,
    ResultApplier,
    filter_valid_labels,
)
from src.labeler.labels.catalog import (
    DEFAULT_LABELS,
    ISSUE_TYPES,
    TYPE_LABELS,
    LabelCatalog,
    LabelDefinition,
)
from src.labeler.labels.provisioner import LABEL_COLORS, LabelProvisioner

__all__ = [
    "DEFAULT_LABELS",
    "ISSUE_TYPES",
    "LABEL_COLORS",
    "LabelCatalog",
    "LabelDefinition",
    "LabelingResult",
    "LabelProvisioner",
    "ResultApplier",
    "TYPE_LABELS",
    "filter_valid_labels",
]
