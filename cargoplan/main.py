from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, SEED_CATALOG
from .database import engine, SessionLocal
from .models import Base
from .routes import item_types_routes, container_types_routes, calculations_routes
from .seed import seed_catalog

Base.metadata.create_all(bind=engine)

if SEED_CATALOG:
    db = SessionLocal()
    try:
        seed_catalog(db)
    finally:
        db.close()

app = FastAPI(title="cargoplan")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(item_types_routes, prefix="/item-types")
app.include_router(container_types_routes, prefix="/container-types")
app.include_router(calculations_routes, prefix="/calculations")


@app.get("/health")
def health_check():
    return {"status": "healthy", "service": "cargoplan"}
