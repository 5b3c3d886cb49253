# backend/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database import init_db

# Import routerów
from routes.products import router as products_router
from routes.distributors import router as distributors_router
from routes.customers import router as customers_router
from routes.couriers import router as couriers_router
from routes.users import router as users_router
from routes.cart import router as cart_router
from routes.store import router as store_router
from routes.orders import router as orders_router
from routes.sales import router as sales_router
from routes.purchases import router as purchases_router
from routes.logs import router as logs_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Inicjalizacja
init_db()

app = FastAPI(title="Retail Store API", version="1.0.0")

# CORS Configuration
# Admin panel / storefront dev servers plus the deployed frontend, if configured
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rejestracja routerów
app.include_router(products_router)
app.include_router(distributors_router)
app.include_router(customers_router)
app.include_router(couriers_router)
app.include_router(users_router)
app.include_router(cart_router)
app.include_router(store_router)
app.include_router(orders_router)
app.include_router(sales_router)
app.include_router(purchases_router)
app.include_router(logs_router)

@app.get("/")
def read_root():
    return {"message": "Retail Store API is running"}
