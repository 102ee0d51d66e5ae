import logging
import sys
from contextvars import ContextVar
from gazetteer.core.config import settings

# Preenchido pelo RequestIDMiddleware durante cada requisição
request_id_context: ContextVar[str] = ContextVar("request_id", default="N/A")


class RequestIDFilter(logging.Filter):
    """Filter para adicionar request_id aos logs."""

    def filter(self, record):
        # Logs fora de requisições (startup, carga do dataset) ficam com 'N/A'
        if not hasattr(record, "request_id"):
            record.request_id = request_id_context.get()
        return True


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"

LOG_LEVEL = logging.DEBUG if settings.is_dev else logging.INFO


def setup_logging():
    """Configura logging estruturado para a aplicação."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIDFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(LOG_LEVEL)
    root_logger.handlers = [handler]

    app_logger = logging.getLogger("gazetteer")
    app_logger.setLevel(LOG_LEVEL)

    logging.getLogger("uvicorn").setLevel(LOG_LEVEL)

    # Reduz verbosidade do uvicorn em produção
    uvicorn_access = logging.getLogger("uvicorn.access")
    uvicorn_access.setLevel(logging.INFO if settings.is_dev else logging.WARNING)

    return app_logger


def get_logger(name: str = "gazetteer") -> logging.Logger:
    """Retorna um logger configurado."""
    return logging.getLogger(name)
