"""
Declarative Payload Validation

A rule-set is an ordered list of ``FieldRule`` declarations. ``validate`` walks
the rules in order and returns the first failure as an error value
(``{"error": "..."}``) or ``None`` when the payload is acceptable. Failures are
data, never exceptions, so services can hand them straight back to the caller.

Field models are looked up by name in an open registry; new kinds are added
with ``register_model`` without touching any rule-set or call site::

    @register_model("phone", "a phone number")
    def _phone(value):
        return isinstance(value, str) and value.isdigit()
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence
from uuid import UUID

from pydantic import EmailStr, TypeAdapter, ValidationError

Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class FieldModel:
    """A named primitive validator"""
    name: str
    description: str
    predicate: Predicate


@dataclass(frozen=True)
class FieldRule:
    """One field declaration inside a rule-set"""
    path: str
    model: str
    required: bool = False


_MODELS: Dict[str, FieldModel] = {}


def register_model(name: str, description: str) -> Callable[[Predicate], Predicate]:
    """Register ``predicate`` under ``name``; ``description`` completes "<path> must be ..."."""
    def decorator(predicate: Predicate) -> Predicate:
        _MODELS[name] = FieldModel(name=name, description=description, predicate=predicate)
        return predicate
    return decorator


def get_model(name: str) -> FieldModel:
    """Look up a registered field model. Unknown names are programming errors."""
    try:
        return _MODELS[name]
    except KeyError:
        raise KeyError(f"Unknown field model: {name!r}") from None


def is_valid_id(value: Any) -> bool:
    """True for canonical (hyphenated, 36-char) UUID strings."""
    if not isinstance(value, str):
        return False
    try:
        parsed = UUID(value)
    except ValueError:
        return False
    return str(parsed) == value.lower()


def validate(rule_set: Sequence[FieldRule], payload: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    """
    Check ``payload`` against ``rule_set``.

    Args:
        rule_set: Ordered field rules for one operation
        payload: Incoming data; ``None`` is treated as an empty payload

    Returns:
        ``{"error": message}`` for the first failing field, otherwise None
    """
    data = payload or {}
    for rule in rule_set:
        model = get_model(rule.model)
        value = data.get(rule.path)
        if value is None:
            if rule.required:
                return {"error": f"{rule.path} is required"}
            continue
        if not model.predicate(value):
            return {"error": f"{rule.path} must be {model.description}"}
    return None


# ---------------------------------------------------------------------------
# Built-in field models
# ---------------------------------------------------------------------------

LONG_TEXT_MAX = 300
_USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]{3,20}$")
_email_adapter = TypeAdapter(EmailStr)


@register_model("text", "a non-empty string")
def _text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


@register_model("longText", f"a non-empty text of at most {LONG_TEXT_MAX} characters")
def _long_text(value: Any) -> bool:
    return isinstance(value, str) and 0 < len(value.strip()) and len(value) <= LONG_TEXT_MAX


@register_model("id", "a valid id")
def _id(value: Any) -> bool:
    return is_valid_id(value)


@register_model("email", "a valid email address")
def _email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


@register_model("username", "3-20 letters, digits, dots, dashes or underscores")
def _username(value: Any) -> bool:
    return isinstance(value, str) and bool(_USERNAME_RE.match(value))


@register_model("password", "between 8 and 100 characters")
def _password(value: Any) -> bool:
    return isinstance(value, str) and 8 <= len(value) <= 100


@register_model("arrayOfStrings", "an array of strings")
def _array_of_strings(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


@register_model("arrayOfIds", "an array of valid ids")
def _array_of_ids(value: Any) -> bool:
    return isinstance(value, list) and all(is_valid_id(item) for item in value)


@register_model("number", "a number")
def _number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@register_model("bool", "true or false")
def _bool(value: Any) -> bool:
    return isinstance(value, bool)
