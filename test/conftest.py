import copy
import sys
from pathlib import Path
from urllib.parse import urlparse

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None, text: str | None = None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else ""
        self._is_json = text is None

    def json(self):
        if not self._is_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return copy.deepcopy(self._body)


class FakeSession:
    """Stands in for requests.Session; answers by (method, path)."""

    def __init__(self):
        self.routes: dict[tuple[str, str], list] = {}
        self.calls: list[dict] = []

    def add(self, method: str, path: str, status: int = 200, body=None, text: str | None = None, exc=None):
        item = exc if exc is not None else FakeResponse(status, body, text)
        self.routes.setdefault((method, path), []).append(item)
        return self

    def request(self, method, url, params=None, json=None, timeout=None):
        path = urlparse(url).path
        self.calls.append({"method": method, "path": path, "params": params, "json": json, "timeout": timeout})
        queue = self.routes.get((method, path))
        if not queue:
            raise AssertionError(f"Unexpected request {method} {path}")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, BaseException):
            raise item
        return item

    def calls_to(self, method: str, path: str) -> list[dict]:
        return [c for c in self.calls if c["method"] == method and c["path"] == path]


class ManualDispatcher:
    """Holds submitted jobs until the test runs them."""

    def __init__(self):
        self.pending = []

    def submit(self, fn, on_done, on_error=None):
        self.pending.append((fn, on_done, on_error))

    def run_next(self, index: int = 0):
        fn, on_done, on_error = self.pending.pop(index)
        try:
            result = fn()
        except Exception as e:
            if on_error is None:
                raise
            on_error(e)
            return
        on_done(result)

    def run_all(self):
        while self.pending:
            self.run_next()


@pytest.fixture
def fake_http():
    return FakeSession()


@pytest.fixture
def repo(fake_http):
    from minipos.repositories.backend_repo import BackendRepository

    return BackendRepository("http://pos.test", timeout=5, session=fake_http)


@pytest.fixture
def manual_dispatcher():
    return ManualDispatcher()


def product(pid: str = "p1", name: str = "Apple", price: float = 10.0, stock: int = 5, sku: str = "SKU-1"):
    from minipos.domain.models import Product

    return Product(id=pid, name=name, sku=sku, price=price, stock=stock, category="Fruit")


@pytest.fixture
def make_product():
    return product
