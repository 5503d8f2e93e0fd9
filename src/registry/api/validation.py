"""
Request validation errors reported with registry rule identifiers.

FastAPI rejects malformed bodies before any service runs. The handler keeps
the 422 status but answers with the same ``{"detail": {"code", "message"}}``
body as the domain errors, naming the rule the field breaks when one applies.
"""
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.registry.core.domain.errors import ErrorCode
from src.registry.logging import get_logger

logger = get_logger(__name__)

INVALID_REQUEST = "INVALID_REQUEST"

# ErrorCode lists the rules in the order the core checks them
_RULE_ORDER = {code.value: index for index, code in enumerate(ErrorCode)}

_BLANK = ("missing", "string_too_short", "value_error")

# (resource, field) -> {pydantic error type: rule}
_FIELD_RULES: dict[tuple[str, str], dict[str, ErrorCode]] = {
    ("animals", "name"): dict.fromkeys(_BLANK, ErrorCode.NAME_REQUIRED),
    ("animals", "breed"): dict.fromkeys(_BLANK, ErrorCode.BREED_REQUIRED),
    ("animals", "age"): {"greater_than_equal": ErrorCode.NEGATIVE_AGE},
    ("animals", "weight"): {"greater_than_equal": ErrorCode.NON_POSITIVE_WEIGHT},
    ("owners", "first_name"): dict.fromkeys(_BLANK, ErrorCode.FIRST_NAME_REQUIRED),
    ("owners", "last_name"): dict.fromkeys(_BLANK, ErrorCode.LAST_NAME_REQUIRED),
    ("owners", "email"): {"missing": ErrorCode.EMAIL_REQUIRED, "value_error": ErrorCode.INVALID_EMAIL_FORMAT},
    ("owners", "phone"): {
        "missing": ErrorCode.PHONE_REQUIRED,
        "string_pattern_mismatch": ErrorCode.INVALID_PHONE_FORMAT,
    },
    ("owners", "address"): dict.fromkeys(_BLANK, ErrorCode.ADDRESS_REQUIRED),
    ("owners", "city"): dict.fromkeys(_BLANK, ErrorCode.CITY_REQUIRED),
    ("owners", "postal_code"): {
        "missing": ErrorCode.POSTAL_CODE_REQUIRED,
        "string_pattern_mismatch": ErrorCode.INVALID_POSTAL_CODE,
    },
    ("owners", "age"): {
        "greater_than_equal": ErrorCode.UNDERAGE,
        "less_than_equal": ErrorCode.AGE_TOO_HIGH,
    },
}


def _resource(request: Request) -> str:
    return "owners" if "owners" in request.url.path.split("/") else "animals"


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def rule_for(resource: str, error: dict) -> str:
    """Registry rule behind a single pydantic error, or INVALID_REQUEST."""
    loc = error.get("loc", ())
    if len(loc) != 2 or loc[0] != "body":
        return INVALID_REQUEST
    rules = _FIELD_RULES.get((resource, str(loc[1])), {})
    code = rules.get(error.get("type", ""))
    if code is None:
        return INVALID_REQUEST
    # Too short or failing the blank check only means "required" when nothing was given
    if code.endswith("_REQUIRED") and error["type"] != "missing" and not _is_blank(error.get("input")):
        return INVALID_REQUEST
    return str(code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer a malformed request with 422 and the first broken rule."""
    resource = _resource(request)
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body") or "body",
            "code": rule_for(resource, error),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.error(f"Rejected malformed request to {request.url.path}: {errors}")

    ranked = [e for e in errors if e["code"] != INVALID_REQUEST]
    if ranked:
        first = min(ranked, key=lambda e: _RULE_ORDER[e["code"]])
    else:
        first = errors[0] if errors else None
    detail = {
        "code": first["code"] if first else INVALID_REQUEST,
        "message": f"{first['field']}: {first['message']}" if first else "Request validation failed",
        "errors": errors,
    }
    return JSONResponse(status_code=422, content={"detail": detail})
