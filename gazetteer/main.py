from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from gazetteer.core.config import settings
from gazetteer.core.exceptions import LoadError
from gazetteer.core.logging import setup_logging, get_logger
from gazetteer.core.result import ErrorKind
from gazetteer.db.index import GazetteerIndex, get_index, load_index
from gazetteer.middleware.request_id import RequestIDMiddleware
from gazetteer.services.dispatch import dispatch
from gazetteer.api import api_router

# Configura logging antes de criar a app
setup_logging()
logger = get_logger("gazetteer.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Carrega o dataset uma única vez, antes de atender qualquer requisição."""
    try:
        app.state.index = load_index(settings.dataset_path, encoding=settings.dataset_encoding)
    except LoadError as exc:
        logger.critical("Startup aborted: %s", exc)
        raise
    logger.info(
        "Gazetteer ready",
        extra={"environment": settings.app_env, "cities": len(app.state.index)},
    )
    yield


app = FastAPI(
    title=settings.app_name,
    description="Read-only city gazetteer: lookup by ID, paginated listing, name search and city comparison",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "cities",
            "description": "Queries over the GeoNames cities dataset.",
        },
        {
            "name": "health",
            "description": "Health check endpoints.",
        },
    ],
)

# Middleware de Request ID (deve vir antes do CORS)
app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
    expose_headers=["X-Request-Id"],
)

app.include_router(api_router)


@app.get("/", tags=["cities"])
def root(request: Request, index: GazetteerIndex = Depends(get_index)):
    """
    Endpoint legado baseado em query string.

    A consulta é escolhida pelos parâmetros presentes: `id`, `page`/`per_page`,
    `city1` + `city2` ou `q`. Sem nenhum deles, responde 400 com o uso.
    """
    result = dispatch(index, request.query_params)
    if not result.is_ok and result.kind is ErrorKind.INVALID_REQUEST:
        return JSONResponse(result.to_payload(), status_code=400)
    return JSONResponse(result.to_payload())


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns the current status of the application and environment.
    """
    return {"status": "ok", "environment": settings.app_env}


def run():
    """Entry point do script `gazetteer-api`."""
    import uvicorn

    uvicorn.run("gazetteer.main:app", host=settings.host, port=settings.port)
