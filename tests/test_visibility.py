from markermap.groups import normalize_groups
from markermap.visibility import (
    ToggleNotification,
    VisibilitySelection,
    VisibilitySession,
    initial_selection,
    is_visible,
    toggle,
    visible_groups,
)


def _groups():
    return normalize_groups(
        [
            {"nodes": ["sjc"], "label": "prod"},
            {"nodes": ["fra"], "label": "staging"},
            {"nodes": ["ams"], "label": "pinned", "group_label": None},
        ]
    )


def test_none_then_toggle_twice():
    sel = initial_selection(_groups(), "none")
    assert sel.labels == frozenset()
    sel = toggle(sel, "prod")
    assert sel.labels == {"prod"}
    sel = toggle(sel, "prod")
    assert sel.labels == frozenset()


def test_initial_all_skips_ungrouped():
    sel = initial_selection(_groups(), "all")
    assert sel.labels == {"prod", "staging"}
    assert initial_selection(_groups()).labels == {"prod", "staging"}


def test_initial_explicit_list():
    assert initial_selection(_groups(), ["staging"]).labels == {"staging"}


def test_toggle_is_self_inverse():
    start = initial_selection(_groups(), "all")
    for label in ("prod", "staging", "unknown"):
        assert start.toggle(label).toggle(label) == start


def test_ungrouped_always_visible():
    groups = _groups()
    sel = VisibilitySelection.none()
    assert is_visible(groups[2], sel)
    assert not is_visible(groups[0], sel)
    assert [g.label for g in visible_groups(groups, sel)] == ["pinned"]


def test_visible_groups_keep_order():
    groups = _groups()
    sel = VisibilitySelection(frozenset({"staging", "prod"}))
    assert [g.label for g in visible_groups(groups, sel)] == ["prod", "staging", "pinned"]


def test_session_applies_events_in_order():
    s = VisibilitySession(_groups(), "none", on_toggle=True)
    for label in ("prod", "staging", "prod"):
        s.post(label)
    assert s.pending == 3
    sent = s.drain()
    assert sent == [
        ToggleNotification(True, "prod", True),
        ToggleNotification(True, "staging", True),
        ToggleNotification(True, "prod", False),
    ]
    assert s.selection.labels == {"staging"}
    assert s.pending == 0


def test_session_without_on_toggle_sends_nothing():
    s = VisibilitySession(_groups(), "all")
    assert s.toggle("prod") is None
    assert "prod" not in s.selection
    assert [g.label for g in s.visible_groups()] == ["staging", "pinned"]


def test_session_toggle_returns_notification():
    s = VisibilitySession(_groups(), "all", on_toggle=True)
    note = s.toggle("staging")
    assert note == ToggleNotification(group_toggled=True, label="staging", now_visible=False)
