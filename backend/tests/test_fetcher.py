import httpx
import pytest

from app.sheets.errors import SheetAccessError, SheetFetchError, SheetNotFoundError
from app.sheets.fetcher import SheetsFetcher


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def _csv(text, status=200, content_type="text/csv; charset=utf-8"):
    def handler(request):
        handler.requests.append(request)
        return httpx.Response(status, text=text, headers={"content-type": content_type})

    handler.requests = []
    return handler


class _Exec:
    def __init__(self, payload):
        self.payload = payload

    def execute(self):
        return self.payload


class FakeSheetsService:
    """Mimics spreadsheets().get(...) and spreadsheets().values().get(...)."""

    def __init__(self, values, tabs=None):
        self._values = values
        self._tabs = tabs or []
        self.ranges = []

    def spreadsheets(self):
        return self

    def values(self):
        return _Values(self)

    def get(self, spreadsheetId, fields=None):
        return _Exec({"sheets": [{"properties": t} for t in self._tabs]})


class _Values:
    def __init__(self, svc):
        self.svc = svc

    def get(self, spreadsheetId, range):
        self.svc.ranges.append(range)
        return _Exec({"values": self.svc._values})


def test_public_csv_first_tab():
    handler = _csv("Function,Core Competency\nEng, Quality \n")
    fetcher = SheetsFetcher(http_client=_client(handler))

    rows = fetcher.fetch_grid("abc123")

    assert rows == [{0: "Function", 1: "Core Competency"}, {0: "Eng", 1: "Quality"}]
    assert str(handler.requests[0].url).endswith("/abc123/export?format=csv")


def test_public_csv_by_gid():
    handler = _csv("a,b\n")
    SheetsFetcher(http_client=_client(handler)).fetch_grid("abc123", "98765")
    assert "export?format=csv&gid=98765" in str(handler.requests[0].url)


def test_public_csv_by_tab_title():
    handler = _csv("a,b\n")
    SheetsFetcher(http_client=_client(handler)).fetch_grid("abc123", "AI Framework")
    url = handler.requests[0].url
    assert url.path.endswith("/abc123/gviz/tq")
    assert url.params["sheet"] == "AI Framework"
    assert url.params["tqx"] == "out:csv"


def test_missing_sheet_without_credentials():
    fetcher = SheetsFetcher(http_client=_client(_csv("", status=404)))
    with pytest.raises(SheetNotFoundError):
        fetcher.fetch_grid("nope")


def test_sign_in_page_is_access_error():
    fetcher = SheetsFetcher(http_client=_client(_csv("<html>Sign in</html>", content_type="text/html")))
    with pytest.raises(SheetAccessError):
        fetcher.fetch_grid("private")


def test_server_error_is_fetch_error():
    fetcher = SheetsFetcher(http_client=_client(_csv("", status=500)))
    with pytest.raises(SheetFetchError):
        fetcher.fetch_grid("flaky")


def test_falls_back_to_sheets_api():
    service = FakeSheetsService([["Competency", "0. Unacceptable"], ["Prompting"]])
    fetcher = SheetsFetcher(http_client=_client(_csv("", status=403)), sheets_service=service)

    rows = fetcher.fetch_grid("private", "AI Framework")

    assert rows == [{0: "Competency", 1: "0. Unacceptable"}, {0: "Prompting"}]
    assert service.ranges == ["'AI Framework'!A:Z"]


def test_sheets_api_resolves_gid_to_title():
    service = FakeSheetsService(
        [["x"]],
        tabs=[{"sheetId": 1, "title": "Values"}, {"sheetId": 42, "title": "Eng's Matrix"}],
    )
    fetcher = SheetsFetcher(http_client=_client(_csv("", status=403)), sheets_service=service)

    fetcher.fetch_grid("private", "42")

    assert service.ranges == ["'Eng''s Matrix'!A:Z"]


def test_sheets_api_unknown_gid():
    service = FakeSheetsService([["x"]], tabs=[{"sheetId": 1, "title": "Values"}])
    fetcher = SheetsFetcher(http_client=_client(_csv("", status=403)), sheets_service=service)

    with pytest.raises(SheetNotFoundError):
        fetcher.fetch_grid("private", "42")


def test_invalid_service_account_key():
    fetcher = SheetsFetcher(http_client=_client(_csv("", status=403)), service_account_key="not-json")
    assert fetcher.has_credentials is True
    with pytest.raises(SheetAccessError):
        fetcher.fetch_grid("private")
