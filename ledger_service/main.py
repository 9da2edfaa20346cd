import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from ledger_service.core.config import settings
from ledger_service.db.database import init_db
from ledger_service.api.v1.routes.users import router as users_router
from ledger_service.api.v1.routes.groups import router as groups_router
from ledger_service.api.v1.routes.expenses import router as expenses_router
from ledger_service.api.v1.routes.settlements import router as settlements_router
from ledger_service.api.v1.routes.balances import router as balances_router
from ledger_service.api.v1.routes.contacts import router as contacts_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title="Ledger Service - Shared Balances",
    description="Tracks shared expenses and settlements and reports who owes whom",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(users_router)
app.include_router(groups_router)
app.include_router(expenses_router)
app.include_router(settlements_router)
app.include_router(balances_router)
app.include_router(contacts_router)


@app.get("/")
def read_root():
    return {"message": "Ledger Service API", "version": "1.0.0"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}
