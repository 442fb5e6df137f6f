# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_404 = "http_404"
HTTP_429 = "http_429"
HTTP_503 = "http_503"

TRANSIENT_STATUS_CODES = {429, 502, 503, 504}

# Validation subcodes
VALIDATION_TYPE_REQUIRED = "validation_type_required"
VALIDATION_ID_REQUIRED = "validation_id_required"
VALIDATION_LIMIT_INVALID = "validation_limit_invalid"
VALIDATION_BULK_LINE_INVALID = "validation_bulk_line_invalid"
VALIDATION_RESPONSE_ENVELOPE = "validation_response_envelope"


def http_subcode(status_code: int) -> str:
    """Return the ``http_<status>`` subcode for a status code."""
    return f"http_{status_code}"
