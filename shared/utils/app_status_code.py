class AppStatusCode:
    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    OPERATION_SUCCESSFUL = "101"

    # Authentication
    AUTHENTICATION_TOKEN_MISSING = "200"
    AUTHENTICATION_TOKEN_INVALID = "201"
    AUTHENTICATION_TOKEN_EXPIRED = "202"
    AUTHENTICATION_SESSION_TIMEOUT = "203"
    AUTHENTICATION_CREDENTIALS_INVALID = "204"
    AUTHENTICATION_USER_INACTIVE = "205"
    AUTHENTICATION_UNAUTHORIZED_ACCESS = "206"

    # Input
    INVALID_INPUT = "300"
    REQUIRED_VALIDATION_ERROR = "301"

    # Partner verification
    PARTNER_NOT_FOUND = "400"
    VERIFICATION_INVALID_TRANSITION = "401"
    VERIFICATION_CONCURRENT_MODIFICATION = "402"

    # Generic
    OPERATION_FAILED = "500"
    OPERATION_ERROR = "501"
