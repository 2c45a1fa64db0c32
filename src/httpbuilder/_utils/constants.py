# Headers
HEADER_CONTENT_TYPE = "Content-Type"

# Media types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_XML = "application/xml"

# Methods
METHOD_GET = "GET"
METHOD_POST = "POST"
METHOD_PUT = "PUT"
METHOD_PATCH = "PATCH"
METHOD_DELETE = "DELETE"

# Defaults
DEFAULT_TIMEOUT_SECONDS = 30.0

# Diagnostics
DEBUG_CATEGORY_HTTP = "http"

# Environment variables
ENV_TIMEOUT = "HTTPBUILDER_TIMEOUT"
ENV_STRICT_DECODING = "HTTPBUILDER_STRICT_DECODING"
ENV_LOG_TRANSPORT = "HTTPBUILDER_LOG_TRANSPORT"
