from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from .models import MatchableProfile

# (camelCase key, snake_case key); the snake_case name is also the MatchableProfile attribute
LIST_FIELDS = [
    ("seekingKeywords", "seeking_keywords"),
    ("offeringKeywords", "offering_keywords"),
    ("expertise", "expertise"),
    ("topicsOfInterest", "topics_of_interest"),
]
LEVEL_KEYS = ("experienceLevel", "experience_level")
CREATED_AT_KEYS = ("createdAt", "created_at")


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _first_present(data: Dict[str, Any], keys: Sequence[str]) -> Any:
    for k in keys:
        if k in data:
            return data[k]
    return None


def _parse_timestamp(v: Any) -> Optional[datetime]:
    if v is None or isinstance(v, datetime):
        return v
    return datetime.fromisoformat(str(v).replace("Z", "+00:00"))


def validate_profile(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Unknown experience levels are allowed; they score as neutral.
    """
    errors: List[str] = []

    if not isinstance(data, dict):
        return ["Profile must be a JSON object"]

    if "id" not in data:
        errors.append("Missing required field: id")
    elif not _is_non_empty_str(data["id"]):
        errors.append("Field 'id' must be a non-empty string")

    for camel, snake in LIST_FIELDS:
        value = _first_present(data, (camel, snake))
        if value is None:
            continue
        if not isinstance(value, list) or not all(isinstance(x, str) for x in value):
            errors.append(f"Field '{camel}' must be a list of strings if provided")

    level = _first_present(data, LEVEL_KEYS)
    if level is not None and not isinstance(level, str):
        errors.append("Field 'experienceLevel' must be a string or null")

    created_at = _first_present(data, CREATED_AT_KEYS)
    if created_at is not None:
        try:
            _parse_timestamp(created_at)
        except ValueError:
            errors.append("Field 'createdAt' must be an ISO-8601 timestamp")

    return errors


def validate_profiles(records: Sequence[Dict[str, Any]]) -> List[str]:
    """Validate every record and check ids are unique within the batch."""
    errors: List[str] = []
    seen = set()
    for index, record in enumerate(records):
        for err in validate_profile(record):
            errors.append(f"Attendee #{index}: {err}")
        if isinstance(record, dict) and _is_non_empty_str(record.get("id")):
            if record["id"] in seen:
                errors.append(f"Attendee #{index}: Duplicate id '{record['id']}'")
            seen.add(record["id"])
    return errors


def profile_from_dict(data: Dict[str, Any]) -> MatchableProfile:
    """Build a MatchableProfile from camelCase or snake_case keys."""
    lists = {snake: list(_first_present(data, (camel, snake)) or []) for camel, snake in LIST_FIELDS}
    level = _first_present(data, LEVEL_KEYS)
    return MatchableProfile(
        id=data["id"],
        experience_level=level.strip().lower() if isinstance(level, str) and level.strip() else None,
        created_at=_parse_timestamp(_first_present(data, CREATED_AT_KEYS)),
        **lists,
    )
