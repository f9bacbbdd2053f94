import httpx
import pytest

from roster.dispatcher import RowActionDispatcher
from roster.errors import AuthFailure, MutationConflict, NetworkFailure, ValidationError
from roster.fetcher import CollectionFetcher
from roster.http_source import HttpDataSource
from roster.models import ScreenStatus, TenantScope
from roster.profiles import EMPLOYEES
from roster.screen import ListScreen
from roster.uploads import MB, UploadGuard

ACME = TenantScope(tenant_id="acme")


@pytest.fixture
def http_source(client, register):
    return HttpDataSource(client, register("admin@acme.com"))


def test_list_screen_over_http(http_source):
    for index in range(12):
        http_source.insert(
            "employees",
            ACME,
            {"first_name": f"Person{index}", "last_name": "Example", "email": f"p{index}@acme.com"},
        )
    screen = ListScreen(CollectionFetcher(http_source, EMPLOYEES), ACME, page_size=5)
    dispatcher = RowActionDispatcher(screen, confirm=lambda message: True)

    screen.load()
    assert screen.view.total == 12
    assert screen.view.page_count == 3
    # newest first
    assert screen.view.visible[0]["first_name"] == "Person11"

    target = screen.visible_ids[0]
    dispatcher.on_select(target, True)
    assert dispatcher.on_delete(target) is True

    assert screen.status == ScreenStatus.READY
    assert screen.view.total == 11
    assert target not in screen.selection


def test_status_codes_map_to_failures(http_source):
    with pytest.raises(MutationConflict) as excinfo:
        http_source.delete("employees", ACME, 999)
    assert excinfo.value.item_id == 999

    with pytest.raises(ValidationError):
        http_source.insert("employees", ACME, {"first_name": "A"})

    with pytest.raises(ValidationError):
        http_source.query("unknown_table", ACME)

    with pytest.raises(AuthFailure):
        http_source.query("employees", TenantScope(tenant_id="globex"))

    expired = HttpDataSource(http_source.client, "not-a-token")
    with pytest.raises(AuthFailure):
        expired.query("employees", ACME)


def test_transport_errors_are_network_failures():
    def offline(request):
        raise httpx.ConnectError("connection refused", request=request)

    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    def broken(request):
        return httpx.Response(503, json={"detail": "maintenance"})

    for handler in (offline, slow, broken):
        client = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://roster.test")
        with pytest.raises(NetworkFailure):
            HttpDataSource(client, "token").query("employees", ACME)


def test_screen_shows_retry_when_offline():
    client = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(502)), base_url="http://roster.test"
    )
    notices = []
    screen = ListScreen(CollectionFetcher(HttpDataSource(client, "token"), EMPLOYEES), ACME, notifier=notices.append)

    screen.load()

    assert screen.status == ScreenStatus.ERROR
    assert notices[0].retryable is True


def test_upload_round_trip(http_source):
    guard = UploadGuard(http_source, ACME)

    stored = guard.upload("scorm_package", "scorm-packages", "courses/intro.zip", "intro.zip", b"PK\x03\x04", "application/zip")

    assert stored == "scorm-packages/courses/intro.zip"


def test_server_rejects_what_the_guard_would(http_source):
    with pytest.raises(ValidationError):
        http_source.upload("scorm-index", "index.exe", b"MZ", "application/octet-stream", ACME)

    with pytest.raises(ValidationError):
        http_source.upload("scorm-index", "index.html", b"x" * (10 * MB + 1), "text/html", ACME)
