from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest

from astra.core.config import Settings


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


class FakeSession:
    """Replays queued responses and records every call."""

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    def _next(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next("post", url, **kwargs)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next("get", url, **kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        gateway_base_url="https://gateway.test/v1",
        gateway_api_key="test-key",
        gateway_model="test-model",
        gateway_max_tokens=1000,
        gateway_timeout=None,
        netlify_base_url="https://netlify.test/api/v1",
        netlify_token="netlify-token",
        deploy_poll_attempts=3,
        deploy_poll_interval=1.0,
        log_level="DEBUG",
    )


def completion(content: str) -> FakeResponse:
    return FakeResponse(200, {"choices": [{"message": {"role": "assistant", "content": content}}]})


SAMPLE_REPLY = """Here is a counter app.

### Features
- Increment button

### FILE: index.html
```html
<!DOCTYPE html>
<html>
<head><title>Counter</title></head>
<body><button id="b">+</button></body>
</html>
```

### FILE: css/style.css
```css
body { color: red; }
```

### FILE: js/script.js
```javascript
console.log("hi");
```
"""
