"""Unit tests for live query subscriptions."""

from routinelog.services.group_service import GroupService
from routinelog.util.subscription import Subscription


class TestSubscription:

    def test_first_snapshot_delivered_immediately(self, db, test_user_id, app_config):
        service = GroupService(db, app_config)
        service.add_group(test_user_id, "Health", "#22c55e")
        received = []

        subscription = service.subscribe_to_groups(test_user_id, received.append)

        assert len(received) == 1
        assert [group.name for group in received[0]] == ["Health"]
        subscription.unsubscribe()

    def test_each_change_delivers_full_result_set(self, db, test_user_id, app_config):
        service = GroupService(db, app_config)
        received = []
        subscription = service.subscribe_to_groups(test_user_id, received.append)

        first = service.add_group(test_user_id, "Health", "#22c55e")
        service.add_group(test_user_id, "Work", "#3b82f6")
        service.delete_group(test_user_id, first)

        assert [[group.name for group in groups] for groups in received] == [
            [],
            ["Health"],
            ["Health", "Work"],
            ["Work"],
        ]
        subscription.unsubscribe()

    def test_unsubscribe_twice_is_noop(self, db, fake_client, test_user_id, app_config):
        service = GroupService(db, app_config)
        received = []
        subscription = service.subscribe_to_groups(test_user_id, received.append)

        subscription.unsubscribe()
        subscription.unsubscribe()
        subscription()

        assert subscription.active is False
        assert fake_client.listeners == []
        service.add_group(test_user_id, "Late", "#000")
        assert len(received) == 1

    def test_snapshot_after_close_is_dropped(self, db, test_user_id):
        received = []
        subscription = Subscription(db.collection("groups", test_user_id), list, received.append)
        subscription.unsubscribe()
        subscription._on_snapshot([object()], [], None)
        assert received == [[]]

    def test_context_manager_unsubscribes(self, db, fake_client, test_user_id):
        with Subscription(db.collection("logs", test_user_id), list, lambda docs: None) as subscription:
            assert subscription.active
            assert len(fake_client.listeners) == 1
        assert fake_client.listeners == []
