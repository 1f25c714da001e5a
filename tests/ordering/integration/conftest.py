import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import inventory_router, order_router, purchase_router, register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(order_router)
    app.include_router(inventory_router)
    app.include_router(purchase_router)
    register_error_handlers(app)
    return TestClient(app)
