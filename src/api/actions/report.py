from fastapi import APIRouter, Request, Response

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# The viewer front-end fetches /data.json; "/" serves the same body.
REPORT_PATHS = ("/", "/data.json")


async def get_report(request: Request) -> Response:
    """Return the report body loaded when the server started."""
    return Response(
        content=request.app.state.report_body,
        media_type="application/json",
        headers=CORS_HEADERS,
    )


async def preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


for _path in REPORT_PATHS:
    router.add_api_route(_path, get_report, methods=["GET"], tags=["Report"])
    router.add_api_route(_path, preflight, methods=["OPTIONS"], tags=["Report"])
