"""Unit tests for the group and sync relation stores."""

import math

import pytest

from configurator.domain.relations import (
    GroupMember,
    GroupRelationStore,
    SyncRelationStore,
    even_split,
    rescale,
)


def _total(store: GroupRelationStore, cabinet_id: str) -> float:
    return math.fsum(m.percentage for m in store.members(cabinet_id))


class TestEvenSplit:
    def test_two_members(self) -> None:
        assert even_split(["a", "b"]) == [GroupMember("a", 50.0), GroupMember("b", 50.0)]

    def test_remainder_goes_to_first_entry(self) -> None:
        members = even_split(["a", "b", "c"])

        assert [m.percentage for m in members] == [33.34, 33.33, 33.33]

    def test_empty(self) -> None:
        assert even_split([]) == []


class TestRescale:
    def test_rescales_to_one_hundred(self) -> None:
        members = rescale([GroupMember("a", 30.0), GroupMember("b", 10.0)])

        assert [m.percentage for m in members] == [75.0, 25.0]

    def test_all_zero_falls_back_to_even_split(self) -> None:
        members = rescale([GroupMember("a", 0.0), GroupMember("b", 0.0)])

        assert [m.percentage for m in members] == [50.0, 50.0]


class TestGroupRelationStore:
    """Tests for the bidirectional pairing relation."""

    def test_add_member_links_both_ways(self) -> None:
        store = GroupRelationStore()

        store.add_member("a", "b")

        assert store.members("a") == [GroupMember("b", 100.0)]
        assert store.members("b") == [GroupMember("a", 100.0)]
        assert store.are_paired("a", "b")
        assert store.are_paired("b", "a")

    def test_adding_members_resets_to_even_split(self) -> None:
        store = GroupRelationStore()

        store.add_member("a", "b")
        store.add_member("a", "c")
        store.add_member("a", "d")

        assert store.member_ids("a") == ["b", "c", "d"]
        assert _total(store, "a") == pytest.approx(100.0)
        assert store.members("a")[0].percentage == 33.34

    def test_adding_existing_member_is_a_no_op(self) -> None:
        store = GroupRelationStore()
        store.add_member("a", "b")

        store.add_member("a", "b")

        assert store.member_ids("a") == ["b"]

    def test_cannot_pair_with_itself(self) -> None:
        with pytest.raises(ValueError):
            GroupRelationStore().add_member("a", "a")

    def test_remove_member_rescales_the_rest(self) -> None:
        store = GroupRelationStore()
        store.add_member("a", "b")
        store.add_member("a", "c")
        store.add_member("a", "d")

        store.remove_member("a", "d")

        assert store.member_ids("a") == ["b", "c"]
        assert _total(store, "a") == pytest.approx(100.0)
        assert store.members("d") == []

    def test_removing_last_member_drops_the_list(self) -> None:
        store = GroupRelationStore()
        store.add_member("a", "b")

        store.remove_member("a", "b")

        assert store.cabinet_ids() == []

    def test_set_percentage_others_absorb_difference(self) -> None:
        store = GroupRelationStore()
        store.add_member("a", "b")
        store.add_member("a", "c")

        store.set_percentage("a", "b", 70.0)

        assert store.members("a") == [GroupMember("b", 70.0), GroupMember("c", 30.0)]

    def test_set_percentage_spreads_over_several_members(self) -> None:
        store = GroupRelationStore()
        store.set_members(
            "a",
            [GroupMember("b", 50.0), GroupMember("c", 25.0), GroupMember("d", 25.0)],
        )

        store.set_percentage("a", "c", 45.0)

        percentages = [m.percentage for m in store.members("a")]
        assert percentages == [40.0, 45.0, 15.0]
        assert math.fsum(percentages) == pytest.approx(100.0)

    def test_set_percentage_is_clamped(self) -> None:
        store = GroupRelationStore()
        store.add_member("a", "b")
        store.add_member("a", "c")

        store.set_percentage("a", "b", 150.0)

        assert store.members("a") == [GroupMember("b", 100.0), GroupMember("c", 0.0)]

    def test_set_percentage_unknown_member(self) -> None:
        store = GroupRelationStore()
        store.add_member("a", "b")

        with pytest.raises(KeyError):
            store.set_percentage("a", "zzz", 10.0)

    def test_set_members_normalizes(self) -> None:
        store = GroupRelationStore()

        store.set_members("a", [GroupMember("b", 1.0), GroupMember("c", 3.0)])

        assert [m.percentage for m in store.members("a")] == [25.0, 75.0]

    def test_remove_cabinet_cleans_every_list(self) -> None:
        store = GroupRelationStore()
        store.add_member("a", "b")
        store.add_member("a", "c")
        store.add_member("d", "c")

        store.remove_cabinet("c")

        assert store.member_ids("a") == ["b"]
        assert store.members("a")[0].percentage == 100.0
        assert store.members("c") == []
        assert "d" not in store.cabinet_ids()


class TestSyncRelationStore:
    """Tests for the bidirectional sync relation."""

    def test_link_is_bidirectional(self) -> None:
        store = SyncRelationStore()

        store.link("a", "b")

        assert store.synced_with("a") == {"b"}
        assert store.synced_with("b") == {"a"}
        assert store.cohort("a") == {"a", "b"}

    def test_link_all(self) -> None:
        store = SyncRelationStore()

        store.link_all(["a", "b", "c"])

        assert store.cohort("b") == {"a", "b", "c"}

    def test_unlink(self) -> None:
        store = SyncRelationStore()
        store.link("a", "b")

        store.unlink("a", "b")

        assert store.to_dict() == {}

    def test_remove_cabinet(self) -> None:
        store = SyncRelationStore()
        store.link_all(["a", "b", "c"])

        store.remove_cabinet("b")

        assert store.to_dict() == {"a": ["c"], "c": ["a"]}

    def test_cannot_sync_with_itself(self) -> None:
        with pytest.raises(ValueError):
            SyncRelationStore().link("a", "a")

    def test_unknown_cabinet_cohort_is_itself(self) -> None:
        assert SyncRelationStore().cohort("x") == {"x"}
