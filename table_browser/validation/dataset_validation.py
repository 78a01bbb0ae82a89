from __future__ import annotations

import logging
from typing import Iterable, List

from table_browser.core.cells import is_number
from table_browser.core.dataset import Dataset
from table_browser.validation.errors import WARNING, ValidationError, ValidationIssue


def dataset_issues(ds: Dataset) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []

    if not ds.columns:
        issues.append(ValidationIssue("DATASET_NO_COLUMNS", "Dataset defines no columns."))
        return issues

    for column_id in ds.column_ids:
        if not column_id.strip():
            issues.append(ValidationIssue("DATASET_BLANK_COLUMN_ID", "Column id is blank."))

    # ragged columns are padded with "" on read
    if ds.is_ragged():
        n = ds.row_count()
        short = [cid for cid, col in ds.columns.items() if len(col.values) < n]
        issues.append(
            ValidationIssue(
                "DATASET_RAGGED_COLUMNS",
                f"Columns {short} are shorter than {n} rows and will be padded with empty cells.",
                severity=WARNING,
            )
        )

    # mixed numbers/text sort as text
    for cid, col in ds.columns.items():
        kinds = {"number" if is_number(v) else "text" for v in col.values if v != ""}
        if len(kinds) > 1:
            issues.append(
                ValidationIssue(
                    "DATASET_MIXED_TYPES",
                    f"Column '{cid}' mixes numbers and text; mixed pairs sort as text.",
                    severity=WARNING,
                )
            )

    return issues


def validate_dataset(ds: Dataset, *, strict: bool = False) -> None:
    """
    Raise ValidationError if the dataset has errors (or any issue at all when strict).
    Warnings alone never fail a non-strict validation.
    """
    issues = dataset_issues(ds)
    failing = issues if strict else [i for i in issues if i.is_error]
    if failing:
        raise ValidationError(issues)


def warn_on_invalid_datasets(datasets: Iterable[Dataset], logger: logging.Logger) -> None:
    """
    Log every validation issue for the given datasets.

    Warn-only: the app still runs, but you get actionable signals in logs
    immediately after load.
    """
    for ds in datasets:
        for issue in dataset_issues(ds):
            logger.warning(
                "Dataset %r validation %s: %s: %s",
                ds.name,
                issue.severity,
                issue.code,
                issue.message,
            )
