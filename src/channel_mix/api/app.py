"""
FastAPI application factory and routes.

Exposes the allocator over HTTP.  Every request carries a complete
``RunRequest``; the server keeps no state between calls.
"""

from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
from loguru import logger

from channel_mix import __version__
from channel_mix.config import get_config
from channel_mix.core.catalog import default_channels
from channel_mix.core.contracts import Channel, ResultRow, RunRequest
from channel_mix.optimization import compute_efficiency_frontier, optimize_allocation
from channel_mix.reporting import to_csv


# =============================================================================
# Pydantic Models for API
# =============================================================================

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str


class TotalsResponse(BaseModel):
    spend: float
    revenue: float
    blended_roas: float


class OptimizationResponse(BaseModel):
    objective: str
    total_budget: float
    rows: list[ResultRow]
    totals: TotalsResponse
    content_lift: float
    seasonality: float
    iterations: int
    stop_reason: str


class FrontierRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    request: RunRequest
    min_budget: float = Field(ge=0)
    max_budget: float = Field(ge=0)
    n_points: int = Field(default=10, ge=1, le=200)


class FrontierPoint(BaseModel):
    budget: float
    spend: float
    revenue: float
    roas: float


class FrontierResponse(BaseModel):
    points: list[FrontierPoint]


# =============================================================================
# FastAPI Application
# =============================================================================

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_config()

    app = FastAPI(
        title="channel-mix API",
        description="Budget allocation across marketing channels",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ==========================================================================
    # Health & Meta Endpoints
    # ==========================================================================

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now().isoformat(),
            version=__version__,
        )

    @app.get("/")
    def root():
        """Root endpoint with API info."""
        return {
            "name": "channel-mix API",
            "version": __version__,
            "docs": "/docs",
            "endpoints": {
                "default_channels": "/api/v1/channels/defaults",
                "optimize": "/api/v1/optimize",
                "export": "/api/v1/optimize/csv",
                "frontier": "/api/v1/frontier",
            },
        }

    # ==========================================================================
    # Optimization Endpoints
    # ==========================================================================

    @app.get("/api/v1/channels/defaults", response_model=list[Channel])
    def get_default_channels():
        """Default channel catalog, as a starting point for a plan."""
        return default_channels()

    @app.post("/api/v1/optimize", response_model=OptimizationResponse)
    def optimize(request: RunRequest):
        """
        Optimize a budget split.

        Returns one row per enabled channel, in request order, plus
        totals and convergence details.
        """
        logger.info(f"API optimize: budget={request.total_budget:,.0f}, objective={request.objective.value}")
        result = optimize_allocation(request)

        return OptimizationResponse(
            objective=result.objective.value,
            total_budget=result.total_budget,
            rows=result.rows,
            totals=TotalsResponse(
                spend=result.totals.spend,
                revenue=result.totals.revenue,
                blended_roas=result.blended_roas,
            ),
            content_lift=result.content_lift,
            seasonality=result.seasonality,
            iterations=result.iterations,
            stop_reason=result.stop_reason.value,
        )

    @app.post("/api/v1/optimize/csv", response_class=PlainTextResponse)
    def optimize_csv(request: RunRequest):
        """Optimize and return the CSV export."""
        result = optimize_allocation(request)
        filename = config.reporting.export_filename
        return PlainTextResponse(
            to_csv(result),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.post("/api/v1/frontier", response_model=FrontierResponse)
    def frontier(body: FrontierRequest):
        """Optimized revenue across a range of budgets."""
        df = compute_efficiency_frontier(
            body.request,
            (body.min_budget, body.max_budget),
            n_points=body.n_points,
        )
        points = [
            FrontierPoint(budget=r.budget, spend=r.spend, revenue=r.revenue, roas=r.roas)
            for r in df.itertuples()
        ]
        return FrontierResponse(points=points)

    return app


# Create default app instance
app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================

def run_server(host: str = "127.0.0.1", port: int = 8000, reload: bool = False):
    """Run the API server."""
    import uvicorn

    logger.info(f"Starting channel-mix API on {host}:{port}")
    uvicorn.run(
        "channel_mix.api.app:app",
        host=host,
        port=port,
        reload=reload,
    )
