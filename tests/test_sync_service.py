"""
Tests for the remote mirror client and the Sync Service.
"""

import pytest

from conftest import SCRIPT_URL, FailingRepository, FakeResponse, make_entries
from worklog.domain.models import Entry
from worklog.infra.remote import RemoteMirrorClient, SyncResult, SyncStatus
from worklog.services.entry_store import EntryStore
from worklog.services.sync_service import SyncService

REMOTE_ENTRIES = [
    {"id": "r1", "date": "2024-05-02T00:00:00.000Z", "from": "07:00", "to": "16:00", "hours": 9},
    {"id": "r2", "date": "2024-05-03", "from": "07:00", "to": "11:30", "hours": 4.5},
]


def make_sync(store, user_repo, http, **kwargs) -> SyncService:
    client = RemoteMirrorClient(timeout=5, session=http)
    return SyncService(store, client, user_repo, company_name="Zimmerei", **kwargs)


@pytest.fixture
def three_entries(store):
    store.replace_all(make_entries(
        ("2024-03-01", "08:00", "12:00"),
        ("2024-03-02", "08:00", "12:00"),
        ("2024-03-03", "08:00", "12:00"),
    ))
    return store.entries


class TestRemoteMirrorClient:

    def test_read_request_shape(self, client, http):
        http.response = FakeResponse(200, {"status": "success", "entries": REMOTE_ENTRIES})
        result = client.fetch_entries(SCRIPT_URL)

        assert result.ok
        [call] = http.gets
        assert call["url"] == SCRIPT_URL
        assert call["params"]["action"] == "read"
        assert isinstance(call["params"]["t"], int)
        assert call["timeout"] == 5
        assert [e.id for e in result.entries] == ["r1", "r2"]
        assert result.entries[0].date == "2024-05-02"

    @pytest.mark.parametrize("response,status", [
        (FakeResponse(500, {"status": "success", "entries": []}), SyncStatus.HTTP_ERROR),
        (FakeResponse(302, {"status": "success", "entries": []}), SyncStatus.HTTP_ERROR),
        (FakeResponse(199, {"status": "success", "entries": []}), SyncStatus.HTTP_ERROR),
        (FakeResponse(200, ValueError("Expecting value")), SyncStatus.MALFORMED),
        (FakeResponse(200, ["not", "an", "object"]), SyncStatus.MALFORMED),
        (FakeResponse(200, {"status": "success", "entries": "nope"}), SyncStatus.MALFORMED),
        (FakeResponse(200, {"status": "success", "entries": [42]}), SyncStatus.MALFORMED),
        (FakeResponse(200, {"status": "error", "message": "quota"}), SyncStatus.REJECTED),
    ])
    def test_read_failures_are_reported_not_raised(self, client, http, response, status):
        http.response = response
        result = client.fetch_entries(SCRIPT_URL)
        assert result.status == status
        assert result.entries == []

    def test_network_error_is_reported(self, offline_http):
        client = RemoteMirrorClient(session=offline_http)
        assert client.fetch_entries(SCRIPT_URL).status == SyncStatus.NETWORK_ERROR
        assert client.send_entries(SCRIPT_URL, {}).status == SyncStatus.NETWORK_ERROR

    def test_empty_url_is_disabled(self, client, http):
        assert client.fetch_entries("").status == SyncStatus.DISABLED
        assert client.send_entries("", {}).status == SyncStatus.DISABLED
        assert http.gets == [] and http.posts == []

    def test_write_ignores_response_status(self, client, http):
        http.response = FakeResponse(500, None)
        assert client.send_entries(SCRIPT_URL, {"action": "write"}).ok


class TestPull:

    @pytest.mark.asyncio
    async def test_success_replaces_and_persists(self, store, user_repo, entry_repo, http,
                                                 sync_prefs, three_entries):
        http.response = FakeResponse(200, {"status": "success", "entries": REMOTE_ENTRIES})
        sync = make_sync(store, user_repo, http)

        result = await sync.pull()

        assert result.ok
        assert [e.id for e in store.entries] == ["r1", "r2"]
        assert [e.id for e in entry_repo.load_entries()] == ["r1", "r2"]
        assert sync.last_pull is result
        # A pulled state is not pushed back
        assert http.posts == []
        sync.shutdown(wait=True)

    @pytest.mark.asyncio
    async def test_network_failure_keeps_local_store(self, store, user_repo, entry_repo,
                                                     offline_http, sync_prefs, three_entries):
        sync = make_sync(store, user_repo, offline_http)

        result = await sync.pull()

        assert result.status == SyncStatus.NETWORK_ERROR
        assert store.entries == three_entries
        assert len(store.entries) == 3
        assert entry_repo.load_entries() == three_entries
        sync.shutdown(wait=True)

    @pytest.mark.asyncio
    async def test_rejected_response_keeps_local_store(self, store, user_repo, http,
                                                       sync_prefs, three_entries):
        http.response = FakeResponse(200, {"status": "error"})
        sync = make_sync(store, user_repo, http)

        result = await sync.pull()

        assert result.status == SyncStatus.REJECTED
        assert store.entries == three_entries
        sync.shutdown(wait=True)

    @pytest.mark.asyncio
    async def test_disabled_without_url(self, store, user_repo, http, three_entries):
        sync = make_sync(store, user_repo, http)
        statuses = []
        sync.status_changed.connect(lambda result: statuses.append(result.status))

        result = await sync.pull()

        assert result.status == SyncStatus.DISABLED
        assert statuses == [SyncStatus.DISABLED]
        assert http.gets == []
        assert store.entries == three_entries
        sync.shutdown(wait=True)

    def test_unsaveable_pull_is_reported(self, user_repo, http, sync_prefs):
        store = EntryStore(FailingRepository())
        sync = make_sync(store, user_repo, http)
        statuses = []
        sync.status_changed.connect(lambda result: statuses.append(result.status))

        pulled = SyncResult(status=SyncStatus.SUCCESS, entries=make_entries(("2024-05-02", "07:00", "16:00")))
        result = sync.apply_pull(pulled)

        assert result.status == SyncStatus.STORAGE_ERROR
        assert "disk full" in result.message
        assert sync.last_pull is result
        assert statuses == [SyncStatus.STORAGE_ERROR]
        assert store.entries == []
        sync.shutdown(wait=True)

    def test_start_and_apply_split(self, store, user_repo, http, sync_prefs):
        http.response = FakeResponse(200, {"status": "success", "entries": REMOTE_ENTRIES})
        sync = make_sync(store, user_repo, http)

        future = sync.start_pull()
        result = future.result(timeout=5)
        # Nothing changes until the result is applied on the owning thread
        assert store.entries == []
        sync.apply_pull(result)
        assert len(store.entries) == 2
        sync.shutdown(wait=True)


class TestPush:

    def test_payload_carries_entries_and_settings(self, store, user_repo, http, sync_prefs):
        sync = make_sync(store, user_repo, http)
        entries = make_entries(("2024-03-01", "08:00", "12:00"))

        sync.push(entries).result(timeout=5)

        [call] = http.posts
        assert call["url"] == SCRIPT_URL
        assert call["json"] == {
            "action": "write",
            "entries": [{"id": "e1", "date": "2024-03-01", "from": "08:00", "to": "12:00", "hours": 4.0}],
            "hourlyWage": 40.0,
            "companyName": "Zimmerei",
            "settings": {"companyName": "Zimmerei", "hourlyWage": 40.0},
        }
        sync.shutdown(wait=True)

    def test_every_mutation_pushes_independently(self, store, user_repo, http, sync_prefs):
        sync = make_sync(store, user_repo, http)

        first = store.create(Entry(date="2024-03-01", from_="08:00", to="12:00"))
        store.create(Entry(date="2024-03-02", from_="08:00", to="12:00"))
        store.delete(first.id)
        sync.shutdown(wait=True)

        assert len(http.posts) == 3
        assert sorted(len(call["json"]["entries"]) for call in http.posts) == [1, 1, 2]

    def test_disabled_push_sends_nothing(self, store, user_repo, http):
        sync = make_sync(store, user_repo, http)
        assert sync.push(make_entries(("2024-03-01", "08:00", "12:00"))) is None
        store.create(Entry(date="2024-03-01", from_="08:00", to="12:00"))
        sync.shutdown(wait=True)
        assert http.posts == []

    def test_failed_push_does_not_touch_local_state(self, store, user_repo, entry_repo,
                                                    offline_http, sync_prefs):
        sync = make_sync(store, user_repo, offline_http)

        created = store.create(Entry(date="2024-03-01", from_="08:00", to="12:00"))
        sync.shutdown(wait=True)

        assert sync.last_push.status == SyncStatus.NETWORK_ERROR
        assert [e.id for e in store.entries] == [created.id]
        assert [e.id for e in entry_repo.load_entries()] == [created.id]

    def test_auto_push_can_be_disabled(self, store, user_repo, http, sync_prefs):
        sync = make_sync(store, user_repo, http, auto_push=False)
        store.create(Entry(date="2024-03-01", from_="08:00", to="12:00"))
        sync.shutdown(wait=True)
        assert http.posts == []
