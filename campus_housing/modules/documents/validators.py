"""
Request body validation for the document API.

Each validator returns ``(doc, errors)``. When ``errors`` is non-empty ``doc``
is None and the caller answers 400 with the full list.
"""
import uuid
from typing import Any, Dict, List, Optional, Tuple

ValidationResult = Tuple[Optional[Dict[str, Any]], List[str]]

NOT_AN_OBJECT = "Body must be an object."


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def is_number(value: Any) -> bool:
    # bool is a subclass of int; JSON true/false are not prices
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _require_string(body: dict, field: str, errors: List[str]):
    if not is_non_empty_string(body.get(field)):
        errors.append(f"{field} is required.")


def _require_number(body: dict, field: str, errors: List[str]):
    if not is_number(body.get(field)):
        errors.append(f"{field} must be a number.")


def _optional_string(body: dict, field: str, errors: List[str]):
    if field in body and not isinstance(body[field], str):
        errors.append(f"{field} must be a string.")


def _optional_bool(body: dict, field: str, errors: List[str]):
    if field in body and not isinstance(body[field], bool):
        errors.append(f"{field} must be a boolean.")


def _optional_string_list(body: dict, field: str, errors: List[str]):
    if field in body and not is_string_list(body[field]):
        errors.append(f"{field} must be an array of strings.")


def _new_id() -> str:
    return str(uuid.uuid4())


def validate_person(body: Any) -> ValidationResult:
    if not isinstance(body, dict):
        return None, [NOT_AN_OBJECT]

    errors: List[str] = []
    _require_string(body, "name", errors)
    _require_string(body, "email", errors)
    _require_string(body, "password", errors)
    _optional_string(body, "phone", errors)
    _optional_string(body, "description", errors)
    _optional_string(body, "profilePicture", errors)
    _optional_string(body, "groupId", errors)
    _optional_bool(body, "landlord", errors)
    _optional_string(body, "userId", errors)

    if errors:
        return None, errors

    return {
        "userId": body.get("userId") or _new_id(),
        "name": body["name"].strip(),
        "email": body["email"].strip(),
        "password": body["password"],
        "phone": body.get("phone"),
        "description": body.get("description"),
        "profilePicture": body.get("profilePicture"),
        "groupId": body.get("groupId"),
        "landlord": body.get("landlord", False),
    }, []


def validate_group(body: Any) -> ValidationResult:
    if not isinstance(body, dict):
        return None, [NOT_AN_OBJECT]

    errors: List[str] = []
    _optional_string(body, "groupId", errors)
    _optional_string_list(body, "userIds", errors)

    if errors:
        return None, errors

    return {
        "groupId": body.get("groupId") or _new_id(),
        "userIds": body.get("userIds") or [],
    }, []


def validate_listing(body: Any) -> ValidationResult:
    if not isinstance(body, dict):
        return None, [NOT_AN_OBJECT]

    errors: List[str] = []
    _optional_string(body, "listingId", errors)
    _optional_bool(body, "onCampus", errors)
    _require_number(body, "price", errors)
    _require_string(body, "address", errors)
    _require_number(body, "bedrooms", errors)
    _require_number(body, "bathrooms", errors)
    _optional_string(body, "gender", errors)
    _require_string(body, "rentalType", errors)
    _optional_bool(body, "verified", errors)
    _optional_string_list(body, "imageUrls", errors)
    _require_string(body, "landlordId", errors)

    if errors:
        return None, errors

    return {
        "listingId": body.get("listingId") or _new_id(),
        "onCampus": body.get("onCampus", False),
        "price": body["price"],
        "address": body["address"].strip(),
        "bedrooms": body["bedrooms"],
        "bathrooms": body["bathrooms"],
        "gender": body.get("gender"),
        "rentalType": body["rentalType"],
        "verified": body.get("verified", False),
        "imageUrls": body.get("imageUrls") or [],
        "landlordId": body["landlordId"],
    }, []


def validate_application(body: Any) -> ValidationResult:
    if not isinstance(body, dict):
        return None, [NOT_AN_OBJECT]

    errors: List[str] = []
    _require_string(body, "listingId", errors)
    _require_string(body, "groupId", errors)
    _optional_string(body, "applicationId", errors)

    if errors:
        return None, errors

    return {
        "applicationId": body.get("applicationId") or _new_id(),
        "listingId": body["listingId"],
        "groupId": body["groupId"],
    }, []


VALIDATORS = {
    "person": validate_person,
    "group": validate_group,
    "listing": validate_listing,
    "application": validate_application,
}
