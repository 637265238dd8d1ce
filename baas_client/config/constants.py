"""
Static constants configuration.

Wire-level conventions of the storage service and default limits that do not
change with the environment.
"""

# =============================================================================
# CHUNKED UPLOAD CONSTANTS
# =============================================================================

# Maximum chunk the storage service accepts in one partial request
CHUNK_SIZE = 5 * 1024 * 1024  # 5 MiB

# Sentinel id asking the server to allocate the resource id
UNIQUE_ID = "unique()"

# Form field carrying the binary payload
FILE_PARAM = "file"

# Response field holding a resource id
ID_FIELD = "$id"

# =============================================================================
# HEADERS
# =============================================================================

CONTENT_RANGE_HEADER = "Content-Range"
RESOURCE_ID_HEADER = "x-appwrite-id"
PROJECT_HEADER = "X-Appwrite-Project"
API_KEY_HEADER = "X-Appwrite-Key"

MULTIPART_CONTENT_TYPE = "multipart/form-data"
JSON_CONTENT_TYPE = "application/json"

# =============================================================================
# TRANSPORT DEFAULTS
# =============================================================================

DEFAULT_HTTP_TIMEOUT = 60  # seconds, per request
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0  # seconds
DEFAULT_RETRY_BACKOFF = 2.0

# Status codes worth retrying; everything else is surfaced as-is
TRANSIENT_STATUS_CODES = (502, 503, 504)
