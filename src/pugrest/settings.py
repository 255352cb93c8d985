"""
Configuration settings for the PUG REST client
"""

# PubChem API settings
BASE_URL = "https://pubchem.ncbi.nlm.nih.gov/rest/pug"
TIMEOUT = 12
MAX_RETRY = 4
CHUNK_SIZE = 25

# Status codes for which the service guarantees a <Fault> body
FAULT_STATUS_CODES = frozenset({400, 404, 405, 500, 501, 503, 504})
# Status codes retried by the transport before giving up
RETRY_STATUS_CODES = frozenset({429})

# Byte chunk size fed to the XML pull parser
READ_CHUNK_SIZE = 8192

# Sleep intervals (seconds)
SLEEP_PROP = 2.0

# HTTP headers
USER_AGENT = {"User-Agent": "Mozilla/5.0 (pugrest PubChem API client)"}

# File extensions and patterns
OUTPUT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# Logging
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_LEVEL = "DEBUG"
