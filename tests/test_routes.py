import pytest
from fastapi.testclient import TestClient

from astra.core.errors import ConfigurationError, DeployTimeoutError, PaymentRequiredError, RateLimitError
from astra.main import create_app
from astra.routes.deps import get_gateway_client, get_netlify_client, get_store
from astra.services.workshop import WorkshopStore

from conftest import SAMPLE_REPLY
from test_workshop import StubDeployer, StubGateway


@pytest.fixture
def app(settings):
    return create_app(settings)


def _client(app, gateway=None, deployer=None, store=None):
    app.dependency_overrides[get_gateway_client] = lambda: gateway or StubGateway()
    app.dependency_overrides[get_netlify_client] = lambda: deployer or StubDeployer()
    store = store if store is not None else WorkshopStore()
    app.dependency_overrides[get_store] = lambda: store
    return TestClient(app)


def test_generate_returns_content(app):
    client = _client(app, gateway=StubGateway("reply text"))
    resp = client.post("/functions/ai-code-generator", json={"messages": [{"role": "user", "content": "hi"}]})
    assert resp.status_code == 200
    assert resp.json() == {"content": "reply text"}


@pytest.mark.parametrize(
    "error,status",
    [
        (RateLimitError(), 429),
        (PaymentRequiredError(), 402),
        (ConfigurationError("LOVABLE_API_KEY is not configured"), 500),
    ],
)
def test_generate_errors(app, error, status):
    client = _client(app, gateway=StubGateway(error))
    resp = client.post("/functions/ai-code-generator", json={"messages": []})
    assert resp.status_code == status
    assert resp.json() == {"error": str(error)}


def test_cors_preflight(app):
    client = _client(app)
    resp = client.options(
        "/functions/ai-code-generator",
        headers={"Origin": "https://example.com", "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_deploy_success(app):
    client = _client(app, deployer=StubDeployer())
    resp = client.post("/functions/deploy-to-netlify", json={"htmlContent": "<p>x</p>", "siteName": "s1"})
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "url": "https://live.netlify.app",
        "siteId": "site-9",
        "siteName": "s1",
    }


def test_deploy_rejects_empty_html_without_calling_host(app):
    deployer = StubDeployer()
    client = _client(app, deployer=deployer)
    resp = client.post("/functions/deploy-to-netlify", json={"htmlContent": "", "siteName": "s1"})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "HTML content is required"}
    assert deployer.calls == []


def test_deploy_failure(app):
    client = _client(app, deployer=StubDeployer(DeployTimeoutError("not ready")))
    resp = client.post("/functions/deploy-to-netlify", json={"htmlContent": "<p>x</p>"})
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "not ready"}


def test_workshop_flow(app):
    client = _client(app, gateway=StubGateway(SAMPLE_REPLY))

    assert "prompts" in client.get("/").json()

    resp = client.post("/workshops", json={"initial_message": "counter app"})
    assert resp.status_code == 201
    state = resp.json()
    wid = state["id"]
    assert [m["role"] for m in state["messages"]] == ["assistant", "user", "assistant"]
    assert state["selected_file"] == "index.html"

    preview = client.get(f"/workshops/{wid}/preview")
    assert preview.headers["content-type"].startswith("text/html")
    assert "<style>" in preview.text

    state = client.put(f"/workshops/{wid}/files", json={"path": "js/script.js", "content": "go();"}).json()
    assert "go();" in state["preview"]

    state = client.post(f"/workshops/{wid}/folders/toggle", json={"path": "js"}).json()
    assert state["file_tree"][1]["expanded"] is True

    state = client.post(f"/workshops/{wid}/items", json={"name": "about.html", "type": "file"}).json()
    assert state["file_tree"][-1]["path"] == "about.html"

    dup = client.post(f"/workshops/{wid}/items", json={"name": "about.html", "type": "file"})
    assert dup.status_code == 409

    state = client.post(f"/workshops/{wid}/terminal", json={"command": "ls"}).json()
    assert state["terminal_output"][-1] == "css  js  index.html  about.html"

    msg_id = state["messages"][-1]["id"]
    state = client.post(f"/workshops/{wid}/messages/{msg_id}/typed").json()
    assert state["messages"][-1]["is_typing"] is False

    state = client.post(f"/workshops/{wid}/publish").json()
    assert state["deployment_url"] == "https://live.netlify.app"


def test_workshop_error_message(app):
    client = _client(app, gateway=StubGateway(RateLimitError()))
    wid = client.post("/workshops", json={}).json()["id"]

    state = client.post(f"/workshops/{wid}/messages", json={"message": "hi"}).json()
    assert state["messages"][-1]["content"].startswith("Error:")


def test_unknown_workshop_and_file(app):
    client = _client(app)
    assert client.get("/workshops/nope").status_code == 404

    wid = client.post("/workshops", json={}).json()["id"]
    resp = client.put(f"/workshops/{wid}/files", json={"path": "missing.js", "content": ""})
    assert resp.status_code == 404


def test_delete_workshop(app):
    store = WorkshopStore()
    client = _client(app, store=store)
    wid = client.post("/workshops", json={}).json()["id"]
    assert len(store) == 1

    assert client.delete(f"/workshops/{wid}").status_code == 204
    assert len(store) == 0
    assert client.get(f"/workshops/{wid}").status_code == 404
    assert client.delete(f"/workshops/{wid}").status_code == 404
