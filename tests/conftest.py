import sys
from pathlib import Path

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

# Ensure repository root is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from response_envelope import DynamicEnvelope, Envelope  # noqa: E402
from response_envelope.middleware.errors import (  # noqa: E402
    envelope_response,
    register_exception_handlers,
)


class Item(BaseModel):
    id: int
    name: str


def build_demo_app() -> FastAPI:
    app = FastAPI(title="Envelope Demo")
    register_exception_handlers(app)

    @app.get("/items/{item_id}")
    def read_item(item_id: int):
        if item_id == 0:
            raise HTTPException(status_code=404, detail="item_not_found")
        return envelope_response(Envelope[Item].succeed(Item(id=item_id, name="widget")))

    @app.post("/items")
    def create_item(item: Item):
        return envelope_response(Envelope[Item].succeed_create(item))

    @app.delete("/items/{item_id}")
    def delete_item(item_id: int):
        return envelope_response(DynamicEnvelope.succeed_delete("Item"))

    @app.get("/cached")
    def cached():
        raise HTTPException(status_code=304, headers={"ETag": "v1"})

    @app.get("/boom")
    def boom():
        raise RuntimeError("database exploded")

    @app.get("/partial")
    def partial():
        envelope = DynamicEnvelope.fail("upstream timeout", 502).with_data({"cached": True})
        return envelope_response(envelope)

    return app


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return build_demo_app()


@pytest.fixture(scope="session")
def client(app: FastAPI):
    with TestClient(app) as c:
        yield c
