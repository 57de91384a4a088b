from fastapi import FastAPI

from config import settings
from logging_config import configure_logging
from routes import barcode, products

configure_logging(log_level=settings.log_level, json_output=settings.log_json)

app = FastAPI(title="Food Product Explorer API")

app.include_router(products.router, prefix="/api/products", tags=["Products"])
app.include_router(products.categories_router, prefix="/api/categories", tags=["Products"])
app.include_router(barcode.router, prefix="/api/product", tags=["Product"])

@app.get("/")
def read_root():
    return {"message": "API is running!"}
