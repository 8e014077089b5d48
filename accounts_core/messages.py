"""Human-readable messages carried by errors and responses.

Every message returned to clients is defined here so endpoint tests and
services agree on the exact wording.
"""

# Credentials and lookup
INVALID_PASSWORD = "Password does not match. Please try again."
INVALID_EMAIL = "The provided email address is invalid. Please try again."
USER_NOT_FOUND = "Unable to find user. Please try again."
MISSING_FIELDS = "Please provide all required fields."
UNEXPECTED_ERROR = "An unexpected error occurred."

# Tokens
UNABLE_TO_CREATE_TOKEN = "Unable to create a new token."
UNABLE_TO_ENCODE_TOKEN = "Unable to encode token."
MISSING_SIGNING_KEY = "Token signing key is not configured."
MALFORMED_TOKEN = "The provided token is malformed."
EXPIRED_TOKEN = "The provided token has expired."
UNAUTHORIZED = "Authentication required."

# Registration and password management
PASSWORD_REQUIREMENTS = (
    "Password does not meet requirements. Please check that the following is true:\n"
    " It contains at least 8 and at most 32 characters.\n"
    " It contains at least one digit.\n"
    " It contains at least one upper case alphabet.\n"
    " It contains at least one lower case alphabet.\n"
    " It contains at least one special character which includes !@#$%^&*()-+=.\n"
    " It doesn't contain any white space."
)
EMAIL_REQUIREMENTS = (
    "Email does not meet requirements. "
    "Please ensure your email follows the email@site.tld format."
)
UNABLE_TO_VALIDATE_USER = "Unable to validate user. Please try again."
USER_ALREADY_EXISTS = "This user already exists."
PASSWORD_MISMATCH = "Passwords do not match!"
UNABLE_TO_HASH_PASSWORD = "Unable to hash password. Please try again."
MISSING_OLD_PASSWORD = (
    "Missing old password in the request. "
    "Old password is required in order to update to new password."
)
MISSING_NEW_PASSWORD = (
    "Missing new password in the request. "
    "New password is required in order to update your password."
)
GENERIC_PASSWORD_UPDATE_FAILURE = "Unable to update password."
