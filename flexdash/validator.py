from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence
import logging

from .cleaner import clean_row
from .schema import detect_data_type

log = logging.getLogger("flexdash.validator")


@dataclass
class ValidationIssue:
    row: int
    column: str
    message: str
    severity: str  # 'error' | 'warning'


@dataclass
class ValidationResult:
    valid_rows: List[Dict[str, Any]] = field(default_factory=list)
    is_valid: bool = False
    total_rows: int = 0
    valid_row_count: int = 0
    issues: List[ValidationIssue] = field(default_factory=list)
    detected_columns: List[str] = field(default_factory=list)
    data_type: str = 'unknown'
    status: str = 'error'  # 'valid' | 'warning' | 'error'
    message: str = ''

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == 'error']

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == 'warning']


def validate_rows(rows: Sequence[Dict[str, Any]]) -> ValidationResult:
    if not rows:
        return ValidationResult(
            issues=[ValidationIssue(0, 'general', 'No data found', 'error')],
            message='No data found in file',
        )

    detected_columns = [str(c).strip() for c in rows[0].keys()]
    data_type = detect_data_type(detected_columns)

    valid = []
    issues = []
    for i, row in enumerate(rows, start=1):
        cleaned, has_data = clean_row(row)
        if has_data:
            valid.append(cleaned)
        else:
            issues.append(ValidationIssue(i, 'general', 'Row contains no valid data', 'warning'))

    n_errors = sum(1 for x in issues if x.severity == 'error')
    n_warnings = len(issues) - n_errors
    if n_errors:
        status = 'error'
        message = f"{n_errors} critical errors found. {len(valid)}/{len(rows)} rows can be loaded."
    elif n_warnings:
        status = 'warning'
        message = f"{n_warnings} warnings found. {len(valid)}/{len(rows)} rows loaded successfully."
    else:
        status = 'valid'
        message = f"{len(valid)} rows loaded successfully"

    if not valid:
        status = 'error'
    log.debug(f"validated {len(rows)} rows: {message}")

    return ValidationResult(
        valid_rows=valid,
        is_valid=len(valid) > 0,
        total_rows=len(rows),
        valid_row_count=len(valid),
        issues=issues,
        detected_columns=detected_columns,
        data_type=data_type,
        status=status,
        message=message,
    )
