"""FastAPI application for calendar import and weekly task reports."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.models.responses import ErrorCodes, error_body
from api.routes import calendar_router, health_router, reports_router
from core.config import API_DEBUG, API_VERSION

app = FastAPI(
    title="Weekly Tasks API",
    description="Import calendar files as tasks and build weekly task reports",
    version=API_VERSION,
    debug=API_DEBUG,
)

if API_DEBUG:
    # Local front-end development only
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(health_router)
app.include_router(calendar_router)
app.include_router(reports_router)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    return JSONResponse(
        status_code=500,
        content=error_body(ErrorCodes.INTERNAL_ERROR, "Internal server error"),
    )


if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run("api.main:app", host=API_HOST, port=API_PORT, reload=API_DEBUG)
