"""Constants used throughout SGit."""

# Version
VERSION = "0.1.0"

# Directory names
SGIT_DIR = ".sgit"
OBJECTS_DIR = "objects"

# File names
HEAD_FILE = "HEAD"
INDEX_FILE = "index"
LOCK_FILE = "lock"

# Hash algorithm
HASH_ALGORITHM = "sha1"
HASH_LENGTH = 40  # SHA-1 produces 40 hex characters

# Repository lock timing (seconds)
LOCK_TIMEOUT_SECONDS = 5.0
LOCK_POLL_INTERVAL = 0.05

# Diff presentation
ADDED_PREFIX = "++"
REMOVED_PREFIX = "--"

# Exit codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2
EXIT_DATA_ERROR = 3
EXIT_INTERRUPTED = 130
