from enum import Enum

DEFAULT_USER_AGENT = "AzAuth authenticator v1"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# status the server uses to reject credentials or tokens
UNPROCESSABLE_ENTITY = 422


class Endpoint(Enum):
    AUTHENTICATE = "authenticate"
    VERIFY = "verify"
    LOGOUT = "logout"
