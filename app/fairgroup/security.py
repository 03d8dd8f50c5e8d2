from flask import Flask, Request, Response, request

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}

CORS_ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type"


def allowed_origins(raw: str) -> set[str]:
    """CORS_ORIGIN may hold one origin or a comma-separated list."""
    return {o.strip().rstrip("/") for o in (raw or "").split(",") if o.strip()}


def cors_origin_for(req: Request, origins: set[str]) -> str | None:
    origin = (req.headers.get("Origin") or "").rstrip("/")
    if origin and origin in origins:
        return origin
    return None


def init_security(app: Flask) -> None:
    origins = allowed_origins(app.config.get("CORS_ORIGIN", ""))

    @app.before_request
    def _cors_preflight():
        if request.method != "OPTIONS":
            return None
        # Preflights carry no cookie; answer them before auth runs.
        return Response(status=204)

    @app.after_request
    def _apply_headers(response: Response) -> Response:
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)

        origin = cors_origin_for(request, origins)
        if origin:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Vary"] = "Origin"
            if request.method == "OPTIONS":
                response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
                response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
                response.headers["Access-Control-Max-Age"] = "600"
        return response
