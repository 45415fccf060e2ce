"""
Priority registry tests

Test classes:
    TestInsert     : slotting and collision shifting
    TestIteration  : ascending order, container protocol
"""

from ajaxkit.priority import PriorityRegistry


class TestInsert:
    def test_free_slot_is_honoured(self):
        registry = PriorityRegistry()
        assert registry.insert("a", 1000) == 1000

    def test_collision_shifts_forward(self):
        registry = PriorityRegistry()
        registry.insert("a", 1000)
        assert registry.insert("b", 1000) == 1001

    def test_collision_skips_every_taken_slot(self):
        registry = PriorityRegistry()
        registry.insert("a", 10)
        registry.insert("b", 11)
        registry.insert("c", 13)
        assert registry.insert("d", 10) == 12
        assert registry.insert("e", 10) == 14

    def test_shift_never_goes_backwards(self):
        registry = PriorityRegistry()
        registry.insert("a", 5)
        assert registry.insert("b", 4) == 4
        assert registry.priorities() == [4, 5]


class TestIteration:
    def test_iterates_in_ascending_priority(self):
        registry = PriorityRegistry()
        registry.insert("late", 9000)
        registry.insert("early", 10)
        registry.insert("middle", 1000)
        assert list(registry) == ["early", "middle", "late"]

    def test_shifted_item_follows_the_one_it_collided_with(self):
        registry = PriorityRegistry()
        registry.insert("first", 1000)
        registry.insert("second", 1000)
        registry.insert("before", 999)
        assert list(registry) == ["before", "first", "second"]

    def test_len_and_contains(self):
        registry = PriorityRegistry()
        item = object()
        registry.insert(item, 1)
        assert len(registry) == 1
        assert item in registry
        assert object() not in registry

    def test_insert_during_iteration_does_not_break_iteration(self):
        registry = PriorityRegistry()
        registry.insert("a", 1)
        seen = []
        for item in registry:
            seen.append(item)
            if len(registry) < 3:
                registry.insert("b", 2)
        assert seen == ["a"]
        assert len(registry) == 2
