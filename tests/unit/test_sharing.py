"""Unit tests for what a friend may see of another user's calendar."""

import itertools

import pytest

from routinelog.exceptions import StoreReadError
from routinelog.models.firestore_types import FriendPermissions, LogDoc
from routinelog.services.friend_service import FriendService
from routinelog.services.item_service import ItemService
from routinelog.services.log_service import LogService
from routinelog.services.sharing_service import SharingService, render_shared_log

OWNER, VIEWER = "uid-owner", "uid-viewer"
PLACEHOLDER = "Completed activity"

ALL_PERMISSIONS = [
    FriendPermissions(viewCalendar=c, viewDetails=d, hideTimes=h)
    for c, d, h in itertools.product([False, True], repeat=3)
]


@pytest.fixture
def sharing(db, app_config):
    return SharingService(db, app_config)


@pytest.fixture
def friendship(db, app_config):
    friends = FriendService(db, app_config)
    request_id = friends.send_friend_request(VIEWER, "viewer", OWNER, "owner")
    friends.respond_to_friend_request(request_id, "accepted")
    return friends


@pytest.fixture
def owner_logs(db, app_config):
    item_id = ItemService(db, app_config).add_item(OWNER, "Therapy", "g1", "Health", "#22c55e")
    logs = LogService(db)
    logs.add_log(OWNER, "2024-03-02", "18:30", item_id, "Therapy")
    logs.add_log(OWNER, "2024-03-01", "09:00", item_id, "Therapy", group_id="g1", group_color="#ef4444")
    return item_id


class TestRenderSharedLog:

    LOG = LogDoc(id="l1", date="2024-03-01", time="09:00", itemId="i1", itemNameSnapshot="Therapy",
                 groupColor="#22c55e")

    @pytest.mark.parametrize("permissions", ALL_PERMISSIONS)
    def test_flags_apply_independently(self, permissions):
        entry = render_shared_log(self.LOG, permissions, PLACEHOLDER)

        assert entry.date == "2024-03-01"
        assert entry.color == "#22c55e"
        assert entry.label == ("Therapy" if permissions.viewDetails else PLACEHOLDER)
        assert entry.time == (None if permissions.hideTimes else "09:00")

    def test_detail_and_time_combinations_are_distinct(self):
        rendered = {
            (entry.label, entry.time)
            for entry in (render_shared_log(self.LOG, p, PLACEHOLDER) for p in ALL_PERMISSIONS)
        }
        assert len(rendered) == 4


class TestLoadFriendCalendar:

    def test_no_friendship_means_no_access(self, sharing, owner_logs, fake_client):
        reads_before = fake_client.reads
        assert sharing.load_friend_calendar(VIEWER, OWNER, "2024-03-01", "2024-03-31") is None
        # only the friendship record was read
        assert fake_client.reads == reads_before + 1

    @pytest.mark.parametrize("permissions", ALL_PERMISSIONS)
    def test_every_permission_combination(self, sharing, friendship, owner_logs, fake_client, permissions):
        friendship.update_friend_permissions(OWNER, VIEWER, permissions)
        reads_before = fake_client.reads

        view = sharing.load_friend_calendar(VIEWER, OWNER, "2024-03-01", "2024-03-31")

        assert view is not None
        assert view.calendar_visible is permissions.viewCalendar
        if not permissions.viewCalendar:
            assert view.entries == [] and view.badges == {}
            assert fake_client.reads == reads_before + 1
            return

        assert [entry.date for entry in view.entries] == ["2024-03-01", "2024-03-02"]
        labels = {entry.label for entry in view.entries}
        assert labels == ({"Therapy"} if permissions.viewDetails else {PLACEHOLDER})
        times = [entry.time for entry in view.entries]
        assert times == ([None, None] if permissions.hideTimes else ["09:00", "18:30"])
        # own group color first, then the item's snapshot
        assert [entry.color for entry in view.entries] == ["#ef4444", "#22c55e"]
        assert view.badges["2024-03-02"].count == 1
        assert [entry.label for entry in view.entries_for("2024-03-02")] == [view.entries[1].label]

    def test_viewer_permissions_come_from_owner_record(self, sharing, friendship, owner_logs):
        friendship.update_friend_permissions(VIEWER, OWNER, FriendPermissions(viewCalendar=False))

        view = sharing.load_friend_calendar(VIEWER, OWNER, "2024-03-01", "2024-03-31")

        assert view.calendar_visible is True
        assert len(view.entries) == 2

    def test_unreadable_owner_items_fall_back_to_log_colors(self, sharing, friendship, owner_logs, fake_client):
        fake_client.denied_paths.append(f"users/{OWNER}/items")

        view = sharing.load_friend_calendar(VIEWER, OWNER, "2024-03-01", "2024-03-31")

        assert [entry.date for entry in view.entries] == ["2024-03-01", "2024-03-02"]
        assert [entry.color for entry in view.entries] == ["#ef4444", "#8b5cf6"]
        assert view.badges["2024-03-02"].colors == ["#8b5cf6"]

    def test_unreadable_owner_logs_still_fail(self, sharing, friendship, owner_logs, fake_client):
        fake_client.denied_paths.append(f"users/{OWNER}/logs")

        with pytest.raises(StoreReadError):
            sharing.load_friend_calendar(VIEWER, OWNER, "2024-03-01", "2024-03-31")
