from typing import List

from eventmanager.events import EventKey, EventManager, ObservedField, add_modifier


def test_set_emits_changed_event(manager: EventManager):
    seen: List[int] = []
    manager.on("count-changed", lambda v, e: seen.append(v))
    count = ObservedField(manager, "count", 0)

    count.set(1)
    count.value = 2

    assert count.get() == 2
    assert seen == [1, 2]


def test_every_assignment_emits(manager: EventManager):
    seen: List[int] = []
    manager.on(EventKey.changed("count"), lambda v, e: seen.append(v))
    count = ObservedField(manager, "count", 0)

    count.set(1)
    count.set(1)

    assert seen == [1, 1]


def test_custom_event_name(manager: EventManager):
    seen: List[str] = []
    manager.on("title-updated", lambda v, e: seen.append(v))
    title = ObservedField(manager, "title", "", event_name="title-updated")

    title.set("hello")

    assert title.event_name == "title-updated"
    assert seen == ["hello"]


def test_value_stored_before_emit(manager: EventManager):
    observed: List[int] = []
    count = ObservedField(manager, "count", 0)
    manager.on("count-changed", lambda v, e: observed.append(count.get()))

    count.set(7)

    assert observed == [7]


def test_field_without_manager_stores_value():
    field = ObservedField(None, "count", 0)
    assert field.set(3) is None
    assert field.get() == 3


def test_modifier_on_change_event(manager: EventManager):
    seen: List[int] = []
    manager.on("volume-changed", lambda v, e: seen.append(v))
    add_modifier(manager, "volume-changed", lambda v: min(v, 100))
    volume = ObservedField(manager, "volume", 0)

    ctx = volume.set(150)

    assert seen == [100]
    assert ctx is not None and ctx.default_prevented is True
