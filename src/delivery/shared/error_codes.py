# Central mapping for the error contract.
# Keep keys stable; API clients rely on these.
ERROR_CODES = {
    # ─── Validation & Requests ──────────────────────────────────────────────
    "validation_error": {
        "http": 400,
        "message": "Validation failed for one or more fields."
    },
    "invalid_argument": {
        "http": 400,
        "message": "Invalid argument."
    },

    # ─── Authentication & Authorization ────────────────────────────────────
    "unauthorized": {
        "http": 401,
        "message": "Unauthorized. Please provide valid credentials."
    },
    "invalid_credentials": {
        "http": 401,
        "message": "Invalid username or password."
    },
    "forbidden": {
        "http": 403,
        "message": "Access denied."
    },

    # ─── Resources ──────────────────────────────────────────────────────────
    "not_found": {
        "http": 404,
        "message": "Resource not found."
    },
    "method_not_allowed": {
        "http": 405,
        "message": "Method not allowed."
    },
    "conflict": {
        "http": 409,
        "message": "Resource already exists."
    },

    # ─── Server ─────────────────────────────────────────────────────────────
    "internal_error": {
        "http": 500,
        "message": "An unexpected error occurred."
    },
}
