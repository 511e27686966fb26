class AppStatusCode:
    # success
    DATA_RETRIEVED_SUCCESSFULLY = "100"

    # client side
    INVALID_INPUT = "200"
    RESOURCE_NOT_FOUND = "201"

    # authentication
    AUTHENTICATION_TOKEN_INVALID = "300"
    AUTHENTICATION_TOKEN_EXPIRED = "301"

    # server side
    OPERATION_FAILED = "400"
    OPERATION_ERROR = "401"
