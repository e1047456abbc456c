from fastapi.responses import JSONResponse


def error_response(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, **extra})


def failure(status_code: int, error: str, **extra) -> JSONResponse:
    """
    Error body for endpoints whose clients read a `success` flag.
    """
    return JSONResponse(status_code=status_code, content={"success": False, "error": error, **extra})
