import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so 'petcare' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("SUPABASE_DISABLED", "1")


@pytest.fixture()
def client():
    # lazy import after env configured
    from petcare.config import Settings
    from petcare.main import create_app

    app = create_app(Settings(supabase_disabled=True, session_settle_timeout=2.0))
    # entering the client runs the lifespan, which starts the session manager
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def registered(client) -> dict[str, str]:
    account = {"email": "owner@example.com", "password": "whiskers1", "full_name": "Jane Doe"}
    r = client.post("/auth/sign-up", json=account)
    assert r.status_code == 201, r.text
    return account
