import pytest


class Resp:
    def __init__(self, status_code=200, body=None, raw=None):
        self.status_code = status_code
        self._body = body
        self._raw = raw

    @property
    def text(self):
        return self._raw if self._raw is not None else str(self._body)

    def json(self):
        if self._raw is not None:
            raise ValueError("not json")
        return self._body


@pytest.fixture
def fake_http(monkeypatch):
    """替换 httpx.Client，记录请求参数并返回固定响应。

    用法: captured = fake_http(status_code=200, body={...}) 或 fake_http(error=exc)
    """

    def install(status_code=200, body=None, raw=None, error=None):
        captured = {"calls": 0}
        response = Resp(status_code=status_code, body=body, raw=raw)

        class Client:
            def __init__(self, *a, **kw):
                captured["client_kwargs"] = kw

            def __enter__(self):
                return self

            def __exit__(self, *a):
                return False

            def post(self, url, json=None, headers=None, params=None, **_):
                captured["url"] = url
                captured["payload"] = json
                captured["headers"] = headers
                captured["params"] = params
                captured["calls"] += 1
                if error is not None:
                    raise error
                return response

        monkeypatch.setattr("httpx.Client", Client)
        return captured

    return install
