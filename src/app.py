"""Academy FastAPI application.

Web server that processes commands synchronously via HTTP. Every request
runs inside the academy domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay ("test", "production").
from academy.domain import academy  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

academy.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Academy API",
    description="Courses, study products, reviews and enrollment progress",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the academy domain context for each request."""
    with academy.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from academy.api import register_error_handlers  # noqa: E402
from academy.catalogue.api import course_router, product_router  # noqa: E402
from academy.identity.api import router as identity_router  # noqa: E402
from academy.learning.api import enrollment_router  # noqa: E402
from academy.ordering.api import router as ordering_router  # noqa: E402
from academy.reviews.api import review_router  # noqa: E402

app.include_router(identity_router)
app.include_router(product_router)
app.include_router(course_router)
app.include_router(review_router)
app.include_router(enrollment_router)
app.include_router(ordering_router)

register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": academy.name}})
