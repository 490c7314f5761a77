import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

import database
from errors import StorageError, ValidationError
from ledger import place_order, register_customer
from reports import dashboard, monthly_report, order_history
from schemas import OrderRequest, RegisterRequest, Report

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Water Can Delivery API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --------------------- Errors ---------------------

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=500, content={"error": exc.message})


# --------------------- Routes ---------------------

@app.get("/")
def root():
    return {"message": "Water Can Delivery API is running"}


@app.get("/schema")
def get_schema():
    from schemas import Customer, Order
    return {
        "customer": Customer.model_json_schema(),
        "order": Order.model_json_schema(),
    }


@app.post("/api/register")
def register(req: RegisterRequest):
    customer = register_customer(req.fullName, req.doorNo, block=req.block, address=req.address)
    return {"message": "User registered successfully!", "userId": customer.userId}


@app.post("/api/order")
def create_order(req: OrderRequest):
    order = place_order(req.userId, req.quantity, vendor_id=req.vendorId)
    return {"message": "Order placed successfully!", "order": order.model_dump()}


@app.get("/api/orders")
def get_orders(userId: Optional[str] = None):
    return {"orders": order_history(userId)}


@app.get("/api/dashboard", response_model=Report)
def get_dashboard():
    return dashboard()


@app.get("/api/reports/monthly", response_model=Report)
def get_monthly_report(month: Optional[str] = None, year: Optional[str] = None, userId: Optional[str] = None):
    return monthly_report(month, year, user_id=userId)


@app.get("/test")
def test_database():
    if database.db is None:
        return {"database": "not configured", "collections": []}
    try:
        collections = database.db.list_collection_names()
    except PyMongoError as e:
        logger.warning("database check failed: %s", e)
        return {"database": f"error: {str(e)[:80]}", "collections": []}
    return {"database": "connected", "collections": collections[:10]}


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 4000))
    uvicorn.run(app, host="0.0.0.0", port=port)
