"""
Constants for the CloudFront access-log grammar and field conventions.
"""

# =============================================================================
# Row Classification
# =============================================================================

# Log-format metadata rows emitted at the top of every CloudFront log file
HEADER_PREFIXES = ("#Version:", "#Fields:")

# CloudFront writes a single hyphen for any column it has no value for
NULL_SENTINEL = "-"

# =============================================================================
# CloudFront Access-Log Fields
# =============================================================================

# Positional token names, in log order. The last token absorbs the remainder
# of the line (newer log versions append further columns after cs-uri-query).
CLOUDFRONT_FIELDS = [
    "date",  # date
    "time",  # time
    "edge_location",  # x-edge-location
    "bytes_sent",  # sc-bytes
    "client_ip",  # c-ip
    "method",  # cs-method
    "host",  # cs(Host)
    "path",  # cs-uri-stem
    "status",  # sc-status
    "referrer",  # cs(Referer)
    "user_agent",  # cs(User-Agent)
    "querystring",  # cs-uri-query
]

TOKEN_COUNT = len(CLOUDFRONT_FIELDS)

# =============================================================================
# Derived Fields
# =============================================================================

# Query-string parameter in which the tracking pixel reports the page URL
DEFAULT_URL_PARAM = "url"

# Browser type labels produced by the default user-agent classifier
BROWSER_TYPE_ROBOT = "Robot"
BROWSER_TYPE_EMAIL = "Email Client"
BROWSER_TYPE_MOBILE = "Mobile Browser"
BROWSER_TYPE_BROWSER = "Browser"
BROWSER_TYPE_UNKNOWN = "Unknown"

# Family reported by ua-parser when it cannot identify the browser
UNKNOWN_BROWSER_FAMILY = "Other"
