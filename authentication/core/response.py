def standardized_response(success=True, data=None, message=None, error=None, error_code=None, **extra):
    """
    Build the envelope every API response uses.

    {"success": bool, "message": str|None, "data": any, "error": any}
    """
    response = {
        "success": success,
        "message": message,
        "data": data,
    }
    if error is not None:
        response["error"] = error
    if error_code is not None:
        response["error_code"] = error_code
    response.update(extra)
    return response
