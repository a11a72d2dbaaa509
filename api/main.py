"""
Call Graph Editor API

FastAPI application exposing one in-process editing session: import a
specification, edit nodes and edges, validate and export it back.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import graph, health, nodes
from callgraph import __version__

app = FastAPI(
    title="Call Graph Editor API",
    description="API for importing, editing and exporting microservice call-graph specifications",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,  # must be False when allow_origins is "*"
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(graph.router)
app.include_router(nodes.router)


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn
    from api.dependencies import settings

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
