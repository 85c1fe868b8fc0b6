"""Application Constants.

Centralized constants used throughout the application.
This file contains all hardcoded values that should be maintained in one place.
"""

# ============================================================================
# STORE BACKENDS
# ============================================================================

class StoreBackends:
    """User store implementations the API layer can compose."""
    DATABASE = "database"
    MEMORY = "memory"

    ALL = [DATABASE, MEMORY]


# ============================================================================
# VALIDATION LIMITS
# ============================================================================

class ValidationLimits:
    """Field validation limits for the User aggregate."""
    NAME_MAX_LENGTH = 100
    EMAIL_MAX_LENGTH = 100
    CPF_LENGTH = 11
    CPF_CHECK_DIGITS = 2

    # 8-4-4-4-12 hex groups, anchored
    UUID_PATTERN = (
        r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-"
        r"[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
    )


# ============================================================================
# DATE FORMATS
# ============================================================================

class DateFormats:
    """Date formats used for persisted timestamps."""
    DATETIME = "%Y-%m-%d %H:%M:%S"


# ============================================================================
# CREDIT ELIGIBILITY
# ============================================================================

class CreditEligibility:
    """Credit eligibility flag values."""
    ELIGIBLE = 1
    NOT_ELIGIBLE = 0
    MONTHS_PER_YEAR = 12


# ============================================================================
# DATABASE
# ============================================================================

class DatabaseLimits:
    """Column sizes for the users table."""
    UUID_LENGTH = 36
    NAME_LENGTH = ValidationLimits.NAME_MAX_LENGTH
    EMAIL_LENGTH = ValidationLimits.EMAIL_MAX_LENGTH
    CPF_LENGTH = ValidationLimits.CPF_LENGTH


# ============================================================================
# SECURITY & MASKING CONSTANTS
# ============================================================================

class Security:
    """Security-related constants."""
    # Document masking
    DOCUMENT_MASK_CHAR = "*"
    DOCUMENT_VISIBLE_CHARS = 4  # Show last 4 characters
    DOCUMENT_MASK_FULL = "****"  # When document is too short


# ============================================================================
# SPREADSHEET LAYOUT
# ============================================================================

class SpreadsheetLayout:
    """CSV layout accepted and produced by the spreadsheet adapter."""
    HEADERS = ["name", "cpf", "email"]
    DELIMITER = ","
    ACCEPTED_MIME_TYPES = ["text/csv", "text/plain", "application/vnd.ms-excel"]
    # Allowance for multipart boundaries and part headers around the file
    MULTIPART_OVERHEAD_BYTES = 16 * 1024


# ============================================================================
# ERROR MESSAGES
# ============================================================================

class ErrorMessages:
    """Standard error messages."""
    INTERNAL_SERVER_ERROR = "Internal server error"

    # Field validation
    ID_INVALID = "The user id is not valid"
    NAME_EMPTY = "The user name cannot be empty"
    NAME_TOO_LONG = "The user name exceeds the max length"
    EMAIL_EMPTY = "The user email cannot be empty"
    EMAIL_TOO_LONG = "The user email exceeds the max length"
    EMAIL_INVALID = "The user email is not valid"
    CPF_EMPTY = "The user cpf cannot be empty"
    CPF_INVALID = "The user cpf is not valid"
    DATE_CREATION_EMPTY = "The user date creation cannot be empty"
    DATE_CREATION_INVALID = "The user date creation is not in a valid format"
    DATE_EDITION_EMPTY = "The user date edition cannot be empty"
    DATE_EDITION_INVALID = "The user date edition is not in a valid format"
    DATE_EDITION_BEFORE_CREATION = "The user date edition cannot be before the date creation"
    DATE_CREATION_IN_FUTURE = "The user date creation cannot be in the future"
    FIELD_REQUIRED = "The user {field} is required"

    # Aggregate
    CPF_ALREADY_CREATED = "CPF already created"
    EMAIL_ALREADY_CREATED = "Email already created"
    ID_ALREADY_CREATED = "User id already created"
    USER_NOT_FOUND = "The user does not exist"
    BATCH_TYPE_MISMATCH = "The users array must have only users"

    # Spreadsheet
    SPREADSHEET_LINE = "Spreadsheet error: line {line} | {reason}"
    SPREADSHEET_EMPTY = "The spreadsheet content cannot be empty"
    SPREADSHEET_HEADERS = "The spreadsheet headers must be: {headers}"
    SPREADSHEET_NO_ROWS = "The spreadsheet has no users"
    SPREADSHEET_COLUMNS = "Expected {expected} columns, got {got}"
    SPREADSHEET_MIME_TYPE = "The spreadsheet mime type '{mime_type}' is not accepted"
    SPREADSHEET_TOO_LARGE = "The spreadsheet exceeds the max size of {max_kb} KB"
    SPREADSHEET_NO_USERS_TO_EXPORT = "There are no users to export"
    SPREADSHEET_ENCODING = "The spreadsheet must be UTF-8 encoded"


# ============================================================================
# SUCCESS MESSAGES
# ============================================================================

class SuccessMessages:
    """Standard success messages."""
    USERS_IMPORTED = "Users imported successfully"


# ============================================================================
# HTTP HEADERS
# ============================================================================

class HttpHeaders:
    """HTTP header names."""
    REQUEST_ID = "X-Request-ID"
    PROCESS_TIME = "X-Process-Time"


# ============================================================================
# API ENDPOINTS
# ============================================================================

class ApiEndpoints:
    """API endpoint paths."""
    DOCS = "/docs"
    REDOC = "/redoc"
    OPENAPI = "/openapi.json"
    HEALTH = "/health"
    ROOT = "/"
