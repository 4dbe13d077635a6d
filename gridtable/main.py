from fastapi import FastAPI

from gridtable.api.tables import router as tables_router
from gridtable.config import settings
from gridtable.errors import register_error_handlers
from gridtable.logging import configure_logging

configure_logging(settings.log_level)

app = FastAPI(title="gridtable")
register_error_handlers(app)
app.include_router(tables_router)
