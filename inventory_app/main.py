# inventory_app/main.py
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import configure_logging, load_server_config
from .core import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    list_products_logic,
    reset_all_logic,
    update_product_logic,
)

CONFIG = load_server_config()

app = FastAPI(title="inventory-catalog")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(CONFIG.allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Product collection
# ---------------------------
@app.get("/products")
async def list_products(search: Optional[str] = None, categories: Optional[str] = None):
    return await list_products_logic(search, categories)

@app.post("/products", status_code=201)
async def create_product(payload: Dict[str, Any] = Body(...)):
    return await create_product_logic(payload)

# ---------------------------
# Single product
# ---------------------------
@app.get("/products/{product_id}")
async def get_product(product_id: str):
    return await get_product_logic(product_id)

@app.put("/products/{product_id}")
async def update_product(product_id: str, payload: Dict[str, Any] = Body(...)):
    return await update_product_logic(product_id, payload)

@app.delete("/products/{product_id}")
async def delete_product(product_id: str):
    return await delete_product_logic(product_id)

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
if CONFIG.enable_reset:
    @app.post("/reset")
    async def reset_all():
        return await reset_all_logic()


def run():
    """Serve the API with uvicorn using the loaded configuration."""
    import uvicorn

    configure_logging(CONFIG.log_level)
    uvicorn.run(app, host=CONFIG.host, port=CONFIG.port, log_level=CONFIG.log_level.lower())


if __name__ == "__main__":
    run()
